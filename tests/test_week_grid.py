from datetime import date, timedelta

import pytest

from careers.domain.availability.week_grid import (
    half_hour_slots,
    shift_week,
    start_of_week,
    week_days,
)


@pytest.mark.parametrize("offset", range(0, 400, 13))
def test_start_of_week_is_monday_containing_the_day(offset):
    day = date(2024, 1, 1) + timedelta(days=offset)
    monday = start_of_week(day)
    assert monday.weekday() == 0
    assert monday <= day <= monday + timedelta(days=6)


def test_sunday_maps_back_six_days():
    assert start_of_week(date(2025, 3, 16)) == date(2025, 3, 10)


def test_monday_is_its_own_week_start():
    assert start_of_week(date(2025, 3, 10)) == date(2025, 3, 10)


def test_week_days_are_seven_consecutive_dates_anchor_first():
    days = week_days(date(2025, 3, 10))
    assert len(days) == 7
    assert days[0] == date(2025, 3, 10)
    assert days[-1] == date(2025, 3, 16)
    assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


def test_week_days_cross_month_and_year_boundaries():
    days = week_days(date(2024, 12, 30))
    assert days[2] == date(2025, 1, 1)


def test_shift_week_moves_by_seven_days():
    anchor = date(2025, 3, 10)
    assert shift_week(anchor, 1) == date(2025, 3, 17)
    assert shift_week(anchor, -1) == date(2025, 3, 3)
    assert shift_week(shift_week(anchor, 3), -3) == anchor


def test_half_hour_slots_cover_business_hours():
    rows = half_hour_slots()
    assert len(rows) == 25
    assert rows[0] == "07:00"
    assert rows[1] == "07:30"
    assert rows[-1] == "19:30"
    assert "20:00" not in rows
