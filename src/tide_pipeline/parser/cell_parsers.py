"""Micro-parsers for the flattened text of a single tide table cell."""

from __future__ import annotations

import re

from tide_pipeline.domain.models import (
    MISSING_COEFFICIENT,
    MISSING_HEIGHT,
    MISSING_TIME,
    TimeHeight,
)

_DIGITS_RE = re.compile(r"(\d+)")
# 時刻は "03h49" 形式（コロンではなく h 区切り）
_TIME_RE = re.compile(r"(\d{2}h\d{2})")
# 潮位は "1,17 m" 形式（小数点はカンマ）
_HEIGHT_RE = re.compile(r"(\d+(?:,\d+)?)\s*m")


def parse_coefficient(text: str) -> int:
    """Return the first run of digits in ``text``, or 0 when there is none.

    >>> parse_coefficient("Coeff 94")
    94
    >>> parse_coefficient("no digits")
    0
    """
    match = _DIGITS_RE.search(text or "")
    return int(match.group(1)) if match else MISSING_COEFFICIENT


def parse_time_and_height(text: str) -> TimeHeight:
    """Extract a tide time and height from a cell such as ``"03h49 1,17 m"``.

    Time and height are searched independently over the whole text, so their
    order and any residue between them do not matter.

    >>> parse_time_and_height("03h49 1,17m")
    TimeHeight(time='03h49', height='1,17 m')
    >>> parse_time_and_height("")
    TimeHeight(time='--', height='-- m')
    """
    text = text or ""
    time_match = _TIME_RE.search(text)
    height_match = _HEIGHT_RE.search(text)
    return TimeHeight(
        time=time_match.group(1) if time_match else MISSING_TIME,
        height=f"{height_match.group(1)} m" if height_match else MISSING_HEIGHT,
    )
