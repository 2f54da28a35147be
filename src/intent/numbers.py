"""Fallible numeric and date helpers used at the point of matching.

None of these helpers raise on malformed input: a value that cannot be parsed is reported as
`None` (or `False`) and the caller treats it as "does not match".
"""

from __future__ import annotations

import re

_DIGIT_RUN_RE = re.compile(r"\d+")
_INTEGER_CELL_RE = re.compile(r"\s*[+-]?\d+\s*")

# Salaries and thresholds are 32-bit signed integers; anything outside is unparseable.
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def _int32(value: int) -> int | None:
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def first_integer(text: str | None) -> int | None:
    """Return the first maximal run of digits in `text` as an integer.

    Signs, decimal points and grouping separators are not part of a run: `"-5"` yields `5` and
    `"95,000"` yields `95`. A run too large for a 32-bit integer counts as no number.
    """

    match = _DIGIT_RUN_RE.search(text or "")
    if not match:
        return None
    return _int32(int(match.group()))


def parse_int_cell(value: object) -> int | None:
    """Parse a cell value as a 32-bit integer (surrounding whitespace and a leading sign are allowed)."""

    if value is None:
        return None
    text = str(value)
    if not _INTEGER_CELL_RE.fullmatch(text):
        return None
    return _int32(int(text))


def cell_has_year(value: object, year: str) -> bool:
    """Whether a date cell mentions `year` anywhere in its text."""

    if value is None:
        return False
    return year in str(value)
