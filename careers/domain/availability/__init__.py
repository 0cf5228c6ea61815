"""Interview-availability scheduling core.

Pure grid, selection and range logic lives in the submodules re-exported
here. The database-backed service and the editing state machine are imported
from ``service`` and ``editor`` directly.
"""

from careers.domain.availability.ranges import (
    TimeRange,
    compress,
    expand,
    format_time_ranges,
    keys_to_time_slots,
    time_slots_to_keys,
)
from careers.domain.availability.selection import SelectionSet, group_by_date
from careers.domain.availability.slot_keys import decode, encode
from careers.domain.availability.types import (
    ApplicantSummary,
    AvailabilityScope,
    AvailabilitySnapshot,
    InterviewDetails,
    TimeSlot,
)
from careers.domain.availability.week_grid import (
    half_hour_slots,
    shift_week,
    start_of_week,
    week_days,
)

__all__ = [
    "TimeRange",
    "compress",
    "expand",
    "format_time_ranges",
    "keys_to_time_slots",
    "time_slots_to_keys",
    "SelectionSet",
    "group_by_date",
    "decode",
    "encode",
    "ApplicantSummary",
    "AvailabilityScope",
    "AvailabilitySnapshot",
    "InterviewDetails",
    "TimeSlot",
    "half_hour_slots",
    "shift_week",
    "start_of_week",
    "week_days",
]
