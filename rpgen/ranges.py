"""
Character spec parsing: expand strings like "a-z,0-9,x" into characters.
"""

from __future__ import annotations

from typing import Iterable

from .errors import InvalidRangeSpec

RANGE_SEPARATOR = "-"
TOKEN_SEPARATOR = ","


def _split_tokens(spec: str | Iterable[str]) -> list[str]:
    if isinstance(spec, str):
        parts = [spec]
    else:
        parts = list(spec)

    tokens: list[str] = []
    for part in parts:
        tokens.extend(part.split(TOKEN_SEPARATOR))
    return tokens


def _expand_token(token: str) -> list[str]:
    """
    Expand a single comma-free token.

    - "x"      -> ["x"] (a lone "-" is a literal dash)
    - "a-e"    -> inclusive code point range
    - "abc"    -> each character on its own
    """
    if not token:
        raise InvalidRangeSpec(token, "empty entry")

    if len(token) == 1:
        return [token]

    if len(token) == 3 and token[1] == RANGE_SEPARATOR:
        start, end = ord(token[0]), ord(token[2])
        if start > end:
            raise InvalidRangeSpec(
                token,
                f"start character {token[0]!r} is greater than "
                f"end character {token[2]!r}",
            )
        return [chr(code) for code in range(start, end + 1)]

    if RANGE_SEPARATOR in token:
        raise InvalidRangeSpec(
            token, "a range must look like X-Y with one character on each side"
        )

    return list(token)


def parse_char_spec(spec: str | Iterable[str]) -> tuple[str, ...]:
    """
    Turn a comma-separated spec (or several of them) into unique characters.

    Characters keep the order in which they were first seen; callers that
    need an order-independent result sort or subtract it themselves.
    """
    seen: dict[str, None] = {}
    for token in _split_tokens(spec):
        for ch in _expand_token(token):
            seen.setdefault(ch, None)
    return tuple(seen)
