"""Minutes-of-day arithmetic for ``HH:MM`` wall-clock labels.

All grid and range math is integer minutes since midnight. No timezone is
ever applied here.
"""

from __future__ import annotations

import re

SLOT_MINUTES = 30
MINUTES_PER_DAY = 24 * 60
END_OF_DAY = "24:00"

_HHMM_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_hhmm(value: str) -> int:
    """Return minutes since midnight for ``HH:MM``; raise ValueError otherwise."""
    match = _HHMM_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"time out of range: {value!r}")
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_end_hhmm(value: str) -> int:
    """Like parse_hhmm, but also accepts the exclusive end-of-day bound ``24:00``."""
    if value == END_OF_DAY:
        return MINUTES_PER_DAY
    return parse_hhmm(value)


def format_end_hhmm(minutes: int) -> str:
    if minutes == MINUTES_PER_DAY:
        return END_OF_DAY
    return format_hhmm(minutes)


def is_slot_aligned(minutes: int) -> bool:
    return minutes % SLOT_MINUTES == 0


__all__ = [
    "SLOT_MINUTES",
    "MINUTES_PER_DAY",
    "END_OF_DAY",
    "parse_hhmm",
    "format_hhmm",
    "parse_end_hhmm",
    "format_end_hhmm",
    "is_slot_aligned",
]
