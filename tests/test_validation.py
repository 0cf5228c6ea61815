from datetime import date

import pytest

from careers.domain.availability.types import TimeSlot
from careers.domain.availability.validation import validate_time_slot, validate_time_slots
from careers.domain.errors import InvalidRange


def _slot(start="09:00", end="10:00", tz="UTC"):
    return TimeSlot(date(2025, 3, 10), start, end, tz)


def test_valid_slot_passes_through():
    slot = _slot()
    result = validate_time_slot(0, slot)
    assert result.is_success()
    assert result.unwrap() is slot


def test_end_of_day_bound_is_accepted():
    assert validate_time_slot(0, _slot("23:30", "24:00")).is_success()


@pytest.mark.parametrize(
    "start,end,fragment",
    [
        ("10:00", "09:00", "before endTime"),
        ("10:00", "10:00", "before endTime"),
        ("9:00", "10:00", "startTime must be HH:MM"),
        ("09:00", "25:00", "endTime must be HH:MM"),
        ("09:10", "10:00", "30-minute boundary"),
        ("09:00", "10:15", "30-minute boundary"),
        ("24:00", "24:00", "startTime must be HH:MM"),
    ],
)
def test_invalid_ranges_are_reported(start, end, fragment):
    result = validate_time_slot(3, _slot(start, end))
    assert result.is_failure()
    assert isinstance(result.error, InvalidRange)
    assert result.error.index == 3
    assert fragment in str(result.error)


@pytest.mark.parametrize("tz", ["", "   "])
def test_timezone_is_required(tz):
    result = validate_time_slot(0, _slot(tz=tz))
    assert result.is_failure()
    assert "timezone is required" in str(result.error)


def test_first_bad_slot_fails_the_list():
    result = validate_time_slots([_slot(), _slot("11:00", "10:00"), _slot("12:00", "11:00")])
    assert result.is_failure()
    assert result.error.index == 1
    assert str(result.error).startswith("timeSlots[1]:")


def test_empty_list_is_valid():
    result = validate_time_slots([])
    assert result.is_success()
    assert result.unwrap() == []


def test_overlapping_ranges_on_one_date_are_rejected():
    result = validate_time_slots([_slot("09:00", "10:00"), _slot("09:30", "11:00")])
    assert result.is_failure()
    assert isinstance(result.error, InvalidRange)
    assert result.error.index == 1
    assert "overlaps timeSlots[0]" in str(result.error)


def test_overlap_is_reported_on_the_later_starting_range():
    result = validate_time_slots([_slot("10:00", "12:00"), _slot("13:00", "14:00"), _slot("09:00", "11:00")])
    assert result.is_failure()
    assert result.error.index == 0


def test_range_nested_inside_another_is_rejected():
    result = validate_time_slots([_slot("09:00", "12:00"), _slot("10:00", "10:30")])
    assert result.is_failure()
    assert result.error.index == 1


def test_adjacent_ranges_are_allowed():
    result = validate_time_slots([_slot("10:00", "11:00"), _slot("09:00", "10:00"), _slot("23:30", "24:00")])
    assert result.is_success()
    assert len(result.unwrap()) == 3


def test_same_times_on_different_dates_are_allowed():
    other_day = TimeSlot(date(2025, 3, 11), "09:00", "10:00", "UTC")
    assert validate_time_slots([_slot("09:00", "10:00"), other_day]).is_success()
