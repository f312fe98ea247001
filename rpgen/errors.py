"""
Exceptions raised by the password generation engine.

Every error is raised before any random draw happens, and carries the
offending value so callers can build their own messages.
"""

from __future__ import annotations


class PasswordGenerationError(ValueError):
    """Base class for all generation constraint errors."""


class InvalidRangeSpec(PasswordGenerationError):
    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid character spec {token!r}: {reason}")


class EmptyCharacterSet(PasswordGenerationError):
    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = (
            "All characters have been excluded or disabled. "
            "Cannot generate passwords."
        )
        if detail:
            message += f" ({detail})"
        message += (
            "\nHint: Try removing some character exclusions "
            "or enabling character types."
        )
        super().__init__(message)


class InvalidPatternCharacter(PasswordGenerationError):
    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid pattern character {character!r} at position {position}. "
            "Use L (lowercase), U (uppercase), N (numeric), S (symbol)."
        )


class EmptyPattern(InvalidPatternCharacter):
    def __init__(self) -> None:
        self.character = ""
        self.position = 0
        PasswordGenerationError.__init__(
            self, "Pattern is empty; it needs at least one of L, U, N, S."
        )


class UnsatisfiableMinimum(PasswordGenerationError):
    def __init__(self, char_class, minimum: int) -> None:
        self.char_class = char_class
        self.minimum = minimum
        super().__init__(
            f"Minimum of {minimum} {char_class.label} requested, but no "
            f"{char_class.label} are available in the character set."
        )


class MinimumsExceedLength(PasswordGenerationError):
    def __init__(self, total: int, length: int) -> None:
        self.total = total
        self.length = length
        super().__init__(
            f"Minimum character counts add up to {total}, "
            f"which exceeds the password length of {length}."
        )


class ClassUnavailableInCharSet(PasswordGenerationError):
    def __init__(self, char_class, position: int) -> None:
        self.char_class = char_class
        self.position = position
        super().__init__(
            f"Pattern position {position} requires {char_class.label}, "
            "but none are available in the character set."
        )


class LengthOutOfBounds(PasswordGenerationError):
    def __init__(self, length: int, maximum: int) -> None:
        self.length = length
        self.maximum = maximum
        if length <= 0:
            message = "Password length must be greater than 0."
        else:
            message = (
                f"Password length {length} exceeds maximum of {maximum:,} characters."
            )
        super().__init__(message)


class CountOutOfBounds(PasswordGenerationError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Password count must be greater than 0 (got {count}).")


class PatternLengthMismatch(PasswordGenerationError):
    def __init__(self, pattern_length: int, length: int) -> None:
        self.pattern_length = pattern_length
        self.length = length
        super().__init__(
            f"Pattern has {pattern_length} positions but length {length} was "
            "requested. Drop the length or make them agree."
        )


class InvalidMinimum(PasswordGenerationError):
    def __init__(self, name: str, value: int) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a non-negative integer (got {value}).")
