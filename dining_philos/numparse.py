"""Strict decimal parsing and small character and arithmetic helpers."""

from __future__ import annotations

_WHITESPACE = "\t\n\v\f\r "

LLONG_MIN = -(2**63)
LLONG_MAX = 2**63 - 1
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def is_space(ch: str) -> bool:
    """Return True if *ch* is one of tab, newline, vertical tab, form feed, CR or space."""
    return len(ch) == 1 and ch in _WHITESPACE


def is_digit(ch: str) -> bool:
    """Return True if *ch* is an ASCII decimal digit."""
    return len(ch) == 1 and "0" <= ch <= "9"


def abs_diff(a: int, b: int) -> int:
    """Return the distance between two non-negative sizes."""
    return a - b if a >= b else b - a


def _parse_decimal(text: str, low: int, high: int) -> int:
    """Parse an optionally signed decimal integer that must lie in [low, high].

    Leading whitespace is skipped; anything after the digits is an error.
    """
    body = text.lstrip(_WHITESPACE)
    sign = 1
    if body[:1] in ("+", "-"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    if not body:
        raise ValueError(f"no digits in {text!r}")
    if not all(is_digit(ch) for ch in body):
        raise ValueError(f"invalid decimal number {text!r}")
    value = sign * int(body)
    if not low <= value <= high:
        raise ValueError(f"number out of range: {text!r}")
    return value


def parse_long_long(text: str) -> int:
    """Parse *text* as a signed 64-bit decimal integer.

    Raises ValueError if the text is empty, holds anything besides leading
    whitespace, one sign and digits, or does not fit in 64 bits.
    """
    return _parse_decimal(text, LLONG_MIN, LLONG_MAX)


def parse_int(text: str) -> int:
    """Parse *text* as a signed 32-bit decimal integer.

    Raises ValueError on malformed input or a value outside the 32-bit range.
    """
    return _parse_decimal(text, INT_MIN, INT_MAX)