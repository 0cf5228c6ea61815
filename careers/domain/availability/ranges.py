"""Translation between discrete half-hour picks and contiguous time ranges.

This is the only place where the grid's flat set of cells becomes the
persisted list of ``TimeSlot`` ranges, and back.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from careers.domain.availability.clock import (
    SLOT_MINUTES,
    format_end_hhmm,
    format_hhmm,
    is_slot_aligned,
    parse_end_hhmm,
    parse_hhmm,
)
from careers.domain.availability.selection import group_by_date
from careers.domain.availability.slot_keys import encode
from careers.domain.availability.types import TimeSlot


class TimeRange(NamedTuple):
    start: str
    end: str

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


def _end_label(last_start_minutes: int) -> str:
    return format_end_hhmm(last_start_minutes + SLOT_MINUTES)


def compress(start_times: Iterable[str]) -> list[TimeRange]:
    """
    Merge half-hour starts of one date into maximal ``[start, end)`` ranges.

    Starts exactly ``SLOT_MINUTES`` apart join the current run, including the
    ``xx:30`` to ``(xx+1):00`` hour carry; any larger gap opens a new range.
    Duplicates collapse.
    """
    minutes = sorted({parse_hhmm(value) for value in start_times})
    if not minutes:
        return []

    ranges: list[TimeRange] = []
    run_start = previous = minutes[0]
    for current in minutes[1:]:
        if current - previous != SLOT_MINUTES:
            ranges.append(TimeRange(format_hhmm(run_start), _end_label(previous)))
            run_start = current
        previous = current
    ranges.append(TimeRange(format_hhmm(run_start), _end_label(previous)))
    return ranges


def expand(time_range: tuple[str, str]) -> list[str]:
    """Half-hour start labels covering ``[start, end)``."""
    start_label, end_label = time_range
    start = parse_hhmm(start_label)
    end = parse_end_hhmm(end_label)
    if not (is_slot_aligned(start) and is_slot_aligned(end)):
        raise ValueError(f"range {start_label}-{end_label} is not on {SLOT_MINUTES}-minute boundaries")
    if start >= end:
        raise ValueError(f"range {start_label}-{end_label} is empty or reversed")
    return [format_hhmm(minutes) for minutes in range(start, end, SLOT_MINUTES)]


def format_time_ranges(start_times: Iterable[str]) -> str:
    """Render one date's picks as ``"09:00 - 10:30, 14:00 - 14:30"``."""
    return ", ".join(str(time_range) for time_range in compress(start_times))


def keys_to_time_slots(keys: Iterable[str], timezone: str) -> list[TimeSlot]:
    """Compress selected slot keys into TimeSlots ordered by date then start."""
    slots: list[TimeSlot] = []
    for day, start_times in group_by_date(keys).items():
        for time_range in compress(start_times):
            slots.append(
                TimeSlot(
                    date=day,
                    start_time=time_range.start,
                    end_time=time_range.end,
                    timezone=timezone,
                )
            )
    return slots


def time_slots_to_keys(slots: Iterable[TimeSlot]) -> set[str]:
    """Expand persisted ranges back into the slot keys they cover."""
    keys: set[str] = set()
    for slot in slots:
        for start_time in expand((slot.start_time, slot.end_time)):
            keys.add(encode(slot.date, start_time))
    return keys


__all__ = [
    "TimeRange",
    "compress",
    "expand",
    "format_time_ranges",
    "keys_to_time_slots",
    "time_slots_to_keys",
]
