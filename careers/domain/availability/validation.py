from __future__ import annotations

from typing import Optional, Sequence

from careers.core.result import Result, collect_results, failure, success
from careers.domain.availability.clock import (
    SLOT_MINUTES,
    is_slot_aligned,
    parse_end_hhmm,
    parse_hhmm,
)
from careers.domain.availability.types import TimeSlot
from careers.domain.errors import InvalidRange


def validate_time_slot(index: int, slot: TimeSlot) -> Result[TimeSlot, InvalidRange]:
    """Check one slot: HH:MM bounds on the grid step, ``start < end``, a zone label."""
    try:
        start = parse_hhmm(slot.start_time)
    except (TypeError, ValueError):
        return failure(InvalidRange(index, "startTime must be HH:MM", str(slot.start_time)))
    try:
        end = parse_end_hhmm(slot.end_time)
    except (TypeError, ValueError):
        return failure(InvalidRange(index, "endTime must be HH:MM", str(slot.end_time)))

    if not is_slot_aligned(start):
        return failure(
            InvalidRange(index, f"startTime must fall on a {SLOT_MINUTES}-minute boundary", slot.start_time)
        )
    if not is_slot_aligned(end):
        return failure(
            InvalidRange(index, f"endTime must fall on a {SLOT_MINUTES}-minute boundary", slot.end_time)
        )
    if start >= end:
        return failure(
            InvalidRange(index, "startTime must be before endTime", f"{slot.start_time}-{slot.end_time}")
        )
    if not isinstance(slot.timezone, str) or not slot.timezone.strip():
        return failure(InvalidRange(index, "timezone is required"))
    return success(slot)


def _find_overlap(slots: Sequence[TimeSlot]) -> Optional[InvalidRange]:
    ordered = sorted(
        range(len(slots)), key=lambda i: (slots[i].date, parse_hhmm(slots[i].start_time), i)
    )
    previous: Optional[int] = None
    for index in ordered:
        slot = slots[index]
        if previous is not None:
            before = slots[previous]
            if before.date == slot.date and parse_hhmm(slot.start_time) < parse_end_hhmm(before.end_time):
                return InvalidRange(
                    index,
                    f"overlaps timeSlots[{previous}] on {slot.date.isoformat()}",
                    f"{slot.start_time}-{slot.end_time}",
                )
        previous = index
    return None


def validate_time_slots(slots: Sequence[TimeSlot]) -> Result[list[TimeSlot], InvalidRange]:
    """Validate every slot, then reject ranges that overlap on the same date.

    The first offending slot fails the whole list. Adjacent ranges
    (one ending where the next starts) are fine.
    """
    checked = collect_results([validate_time_slot(index, slot) for index, slot in enumerate(slots)])
    if checked.is_failure():
        return checked
    overlap = _find_overlap(slots)
    if overlap is not None:
        return failure(overlap)
    return checked


__all__ = ["validate_time_slot", "validate_time_slots"]
