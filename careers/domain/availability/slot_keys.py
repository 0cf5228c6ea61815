"""Composite ``date_time`` keys for the selection set.

``2025-03-10_09:30`` names one half-hour cell of the grid. Both halves are
fixed-width and zero-padded, so plain string sorting is chronological.
"""

from __future__ import annotations

import re
from datetime import date

from careers.domain.availability.clock import SLOT_MINUTES, is_slot_aligned, parse_hhmm
from careers.domain.errors import MalformedKeyError

KEY_SEPARATOR = "_"

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _check_start(key: object, start_time: str) -> None:
    try:
        minutes = parse_hhmm(start_time)
    except ValueError as exc:
        raise MalformedKeyError(key, "time must be HH:MM") from exc
    if not is_slot_aligned(minutes):
        raise MalformedKeyError(key, f"time must start a {SLOT_MINUTES}-minute cell")


def encode(day: date, start_time: str) -> str:
    """Build the key for ``day`` at the cell starting ``start_time`` (``HH:MM``)."""
    key = f"{day.isoformat()}{KEY_SEPARATOR}{start_time}"
    _check_start(key, start_time)
    return key


def decode(key: str) -> tuple[date, str]:
    """Split a key back into ``(date, "HH:MM")``; raise MalformedKeyError on bad input."""
    if not isinstance(key, str):
        raise MalformedKeyError(key, "not a string")
    parts = key.split(KEY_SEPARATOR)
    if len(parts) != 2:
        raise MalformedKeyError(key, f"expected two fields separated by {KEY_SEPARATOR!r}")
    raw_date, start_time = parts
    if not _DATE_RE.fullmatch(raw_date):
        raise MalformedKeyError(key, "date must be YYYY-MM-DD")
    try:
        day = date.fromisoformat(raw_date)
    except ValueError as exc:
        raise MalformedKeyError(key, "date must be YYYY-MM-DD") from exc
    _check_start(key, start_time)
    return day, start_time


__all__ = ["KEY_SEPARATOR", "encode", "decode"]
