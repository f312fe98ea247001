"""
Pattern parsing: "LLLNNNSSS" -> one character class per position.
"""

from __future__ import annotations

from typing import Iterable

from .charset import CharacterClass
from .errors import EmptyPattern, InvalidPatternCharacter

_LETTER_TO_CLASS = {
    letter: cls
    for cls in CharacterClass
    for letter in (cls.letter, cls.letter.lower())
}


def parse_pattern(text: str) -> tuple[CharacterClass, ...]:
    """
    Map each pattern letter (case-insensitive) to its character class.

    L = lowercase, U = uppercase, N = numeral, S = symbol.
    """
    if not text:
        raise EmptyPattern()

    result: list[CharacterClass] = []
    for position, ch in enumerate(text):
        cls = _LETTER_TO_CLASS.get(ch)
        if cls is None:
            raise InvalidPatternCharacter(ch, position)
        result.append(cls)
    return tuple(result)


def format_pattern(pattern: Iterable[CharacterClass]) -> str:
    return "".join(cls.letter for cls in pattern)


def check_pattern(pattern: Iterable[object]) -> tuple[CharacterClass, ...]:
    """
    Validate an already-parsed pattern with the same rules as parse_pattern.
    """
    result = tuple(pattern)
    if not result:
        raise EmptyPattern()
    for position, item in enumerate(result):
        if not isinstance(item, CharacterClass):
            raise InvalidPatternCharacter(str(item), position)
    return result
