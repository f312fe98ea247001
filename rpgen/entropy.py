"""
Entropy estimates for generated passwords.

This is the size of the search space the generator drew from, in bits,
not a strength audit of any particular password.
"""

from __future__ import annotations

import math
from typing import Iterable

from .charset import CharacterClass, CharSet
from .params import GenerationParams, Patterned


def calculate_entropy(charset_size: int, length: int) -> float:
    """
    Bits of entropy for `length` independent uniform draws from an
    alphabet of `charset_size` characters: length * log2(size).
    """
    if charset_size <= 0 or length <= 0:
        return 0.0
    return length * math.log2(charset_size)


def pattern_entropy(charset: CharSet, pattern: Iterable[CharacterClass]) -> float:
    """Sum of log2(class size) over every pattern position."""
    total = 0.0
    for cls in pattern:
        size = len(charset.members(cls))
        if size:
            total += math.log2(size)
    return total


def params_entropy(charset: CharSet, params: GenerationParams) -> float:
    if isinstance(params.mode, Patterned):
        return pattern_entropy(charset, params.mode.pattern)
    return calculate_entropy(len(charset), params.length)
