"""Small text helpers used by the scene parser."""

from __future__ import annotations

import re

SPACES = " \t\v\r\f\n"

_INT_RE = re.compile(r"([+-]?)([0-9]+)")
_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)
_MAX_SIGNIFICANT_DIGITS = 11


def is_space(char: str) -> bool:
    """Tell whether a single character is whitespace."""
    return len(char) == 1 and char in SPACES


def skip_space(text: str) -> str:
    """Drop leading whitespace."""
    return text.lstrip(SPACES)


def clamp_trailing_space(line: str) -> tuple[str, int]:
    """Cut trailing whitespace; return the line and its last solid index.

    A line with no solid character keeps its first character and reports 0.
    """
    last = 0
    for index, char in enumerate(line):
        if not is_space(char):
            last = index
    return line[: last + 1], last


def parse_int(text: str) -> int:
    """Parse a signed 32-bit decimal integer, raising ValueError if invalid."""
    match = _INT_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    sign, digits = match.groups()
    significant = digits.lstrip("0")
    if len(significant) > _MAX_SIGNIFICANT_DIGITS:
        raise ValueError(f"integer too long: {text!r}")
    value = int(significant or "0")
    if sign == "-":
        value = -value
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value