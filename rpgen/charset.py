"""
Character classes and the alphabet passwords are drawn from.
"""

from __future__ import annotations

import enum
import logging
import string
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from .errors import EmptyCharacterSet
from .ranges import parse_char_spec

logger = logging.getLogger(__name__)


class CharacterClass(enum.Enum):
    LOWERCASE = "L"
    UPPERCASE = "U"
    NUMERAL = "N"
    SYMBOL = "S"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _CLASS_LABELS[self]

    @property
    def characters(self) -> str:
        return CLASS_CHARACTERS[self]


# string.punctuation is exactly ASCII 33-47, 58-64, 91-96 and 123-126.
CLASS_CHARACTERS: Mapping[CharacterClass, str] = {
    CharacterClass.LOWERCASE: string.ascii_lowercase,
    CharacterClass.UPPERCASE: string.ascii_uppercase,
    CharacterClass.NUMERAL: string.digits,
    CharacterClass.SYMBOL: string.punctuation,
}

_CLASS_LABELS = {
    CharacterClass.LOWERCASE: "lowercase letters",
    CharacterClass.UPPERCASE: "capital letters",
    CharacterClass.NUMERAL: "numerals",
    CharacterClass.SYMBOL: "symbols",
}

# Reverse lookup; the classes are disjoint so every character maps to one.
_CLASS_OF: Mapping[str, CharacterClass] = {
    ch: cls for cls, chars in CLASS_CHARACTERS.items() for ch in chars
}


@dataclass(frozen=True)
class CharSet:
    """
    Ordered, duplicate-free alphabet plus a per-class index.

    Characters outside the four ASCII classes (possible only through an
    include spec) are usable in free-form mode but belong to no class.
    """

    chars: tuple[str, ...]
    _by_class: Mapping[CharacterClass, tuple[str, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.chars:
            raise EmptyCharacterSet()
        if len(set(self.chars)) != len(self.chars):
            raise ValueError("CharSet characters must be unique")

        by_class: dict[CharacterClass, list[str]] = {cls: [] for cls in CharacterClass}
        for ch in self.chars:
            cls = _CLASS_OF.get(ch)
            if cls is not None:
                by_class[cls].append(ch)
        object.__setattr__(
            self, "_by_class", {cls: tuple(chs) for cls, chs in by_class.items()}
        )

    def __len__(self) -> int:
        return len(self.chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self.chars

    def __str__(self) -> str:
        return "".join(self.chars)

    def members(self, char_class: CharacterClass) -> tuple[str, ...]:
        """Characters of `char_class` that survived into this set."""
        return self._by_class[char_class]

    @staticmethod
    def class_of(ch: str) -> CharacterClass | None:
        return _CLASS_OF.get(ch)

    def available_classes(self) -> list[CharacterClass]:
        return [cls for cls in CharacterClass if self._by_class[cls]]


def build_char_set(
    *,
    capitals_off: bool = False,
    numerals_off: bool = False,
    symbols_off: bool = False,
    exclude: str | Iterable[str] | None = None,
    include: str | Iterable[str] | None = None,
) -> CharSet:
    """
    Build the alphabet from class switches and include/exclude specs.

    Rules:
    - include given: exactly those characters (sorted by code point),
      the class switches are ignored.
    - otherwise: lowercase, plus every class not switched off, in class order.
    - exclude is subtracted in both cases.
    """
    # Empty specs mean "nothing given", as with an empty flag list.
    if include:
        working = sorted(parse_char_spec(include), key=ord)
        origin = "include_chars"
    else:
        classes = [CharacterClass.LOWERCASE]
        if not capitals_off:
            classes.append(CharacterClass.UPPERCASE)
        if not numerals_off:
            classes.append(CharacterClass.NUMERAL)
        if not symbols_off:
            classes.append(CharacterClass.SYMBOL)
        working = [ch for cls in classes for ch in cls.characters]
        origin = "enabled character types"

    if exclude:
        excluded = set(parse_char_spec(exclude))
        working = [ch for ch in working if ch not in excluded]

    if not working:
        raise EmptyCharacterSet(f"nothing left from {origin} after exclusions")

    charset = CharSet(tuple(working))
    logger.debug(
        "Built character set of %d characters (classes: %s)",
        len(charset),
        "".join(cls.letter for cls in charset.available_classes()) or "-",
    )
    return charset
