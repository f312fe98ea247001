"""
Generation parameters and the checks that run before any random draw.

A request is either free-form (length + minimum counts) or patterned
(one class per position). The two never mix: a pattern fixes every
position, so minimum counts have nothing left to constrain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence, Union

from .charset import CharacterClass, CharSet
from .config import DEFAULT_LENGTH, MAX_PASSWORD_LENGTH
from .errors import (
    ClassUnavailableInCharSet,
    CountOutOfBounds,
    InvalidMinimum,
    LengthOutOfBounds,
    MinimumsExceedLength,
    PatternLengthMismatch,
    UnsatisfiableMinimum,
)
from .pattern import check_pattern, format_pattern, parse_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Minimums:
    capitals: int = 0
    numerals: int = 0
    symbols: int = 0

    def items(self) -> Iterator[tuple[CharacterClass, int]]:
        yield CharacterClass.UPPERCASE, self.capitals
        yield CharacterClass.NUMERAL, self.numerals
        yield CharacterClass.SYMBOL, self.symbols

    @property
    def total(self) -> int:
        return self.capitals + self.numerals + self.symbols

    def __bool__(self) -> bool:
        return self.total > 0


@dataclass(frozen=True)
class FreeForm:
    length: int
    minimums: Minimums = field(default_factory=Minimums)


@dataclass(frozen=True)
class Patterned:
    pattern: tuple[CharacterClass, ...]

    @property
    def length(self) -> int:
        return len(self.pattern)

    def __str__(self) -> str:
        return format_pattern(self.pattern)


Mode = Union[FreeForm, Patterned]


@dataclass(frozen=True)
class GenerationParams:
    mode: Mode
    count: int = 1

    @property
    def length(self) -> int:
        return self.mode.length

    @property
    def is_patterned(self) -> bool:
        return isinstance(self.mode, Patterned)


def _check_minimum(name: str, value: int | None) -> int:
    if value is None:
        return 0
    if value < 0:
        raise InvalidMinimum(name, value)
    return value


def build_params(
    *,
    length: int | None = None,
    count: int = 1,
    min_capitals: int | None = None,
    min_numerals: int | None = None,
    min_symbols: int | None = None,
    pattern: str | Sequence[CharacterClass] | None = None,
) -> GenerationParams:
    """
    Assemble validated, immutable parameters from loose inputs.

    With a pattern the password length is the pattern length. A separately
    given length must agree with it; minimums are dropped.
    """
    if count <= 0:
        raise CountOutOfBounds(count)

    if pattern is not None:
        if isinstance(pattern, str):
            classes = parse_pattern(pattern)
        else:
            classes = check_pattern(pattern)
        if length is not None and length != len(classes):
            raise PatternLengthMismatch(len(classes), length)
        _check_length(len(classes))
        if any(v for v in (min_capitals, min_numerals, min_symbols)):
            logger.debug("Pattern given; ignoring minimum character counts")
        return GenerationParams(mode=Patterned(classes), count=count)

    if length is None:
        length = DEFAULT_LENGTH
    _check_length(length)

    minimums = Minimums(
        capitals=_check_minimum("min_capitals", min_capitals),
        numerals=_check_minimum("min_numerals", min_numerals),
        symbols=_check_minimum("min_symbols", min_symbols),
    )
    return GenerationParams(mode=FreeForm(length, minimums), count=count)


def _check_length(length: int) -> None:
    if length <= 0 or length > MAX_PASSWORD_LENGTH:
        raise LengthOutOfBounds(length, MAX_PASSWORD_LENGTH)


def validate_minimums(params: GenerationParams, charset: CharSet) -> None:
    """
    Fail if the requested minimums cannot be met with this character set.

    Checked in order: a class with a minimum but no characters, then the
    sum of all minimums against the length.
    """
    mode = params.mode
    if not isinstance(mode, FreeForm):
        return

    for char_class, minimum in mode.minimums.items():
        if minimum > 0 and not charset.members(char_class):
            raise UnsatisfiableMinimum(char_class, minimum)

    if mode.minimums.total > mode.length:
        raise MinimumsExceedLength(mode.minimums.total, mode.length)


def validate_pattern(params: GenerationParams, charset: CharSet) -> None:
    mode = params.mode
    if not isinstance(mode, Patterned):
        return

    for position, char_class in enumerate(mode.pattern):
        if not charset.members(char_class):
            raise ClassUnavailableInCharSet(char_class, position)


def validate(params: GenerationParams, charset: CharSet) -> None:
    validate_minimums(params, charset)
    validate_pattern(params, charset)


def count_classes(password: Iterable[str]) -> dict[CharacterClass, int]:
    """Count how many characters of each class a password holds."""
    counts = {cls: 0 for cls in CharacterClass}
    for ch in password:
        cls = CharSet.class_of(ch)
        if cls is not None:
            counts[cls] += 1
    return counts


def minimums_met(password: Iterable[str], minimums: Minimums) -> bool:
    counts = count_classes(password)
    return all(counts[cls] >= minimum for cls, minimum in minimums.items())
