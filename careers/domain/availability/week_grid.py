"""Weekly grid geometry: Monday-anchored weeks and business-hours rows."""

from __future__ import annotations

from datetime import date, timedelta

from careers.domain.availability.clock import SLOT_MINUTES, format_hhmm

DAYS_PER_WEEK = 7
# First row 07:00, last row 19:30 (ends 20:00).
BUSINESS_DAY_START = 7 * 60
BUSINESS_DAY_END = 20 * 60


def start_of_week(day: date) -> date:
    """Monday of the ISO week containing ``day``; Sunday maps back six days."""
    return day - timedelta(days=day.weekday())


def week_days(anchor: date) -> list[date]:
    return [anchor + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def shift_week(anchor: date, weeks: int) -> date:
    return anchor + timedelta(days=DAYS_PER_WEEK * weeks)


def half_hour_slots() -> list[str]:
    return [
        format_hhmm(minutes)
        for minutes in range(BUSINESS_DAY_START, BUSINESS_DAY_END, SLOT_MINUTES)
    ]


__all__ = [
    "DAYS_PER_WEEK",
    "BUSINESS_DAY_START",
    "BUSINESS_DAY_END",
    "start_of_week",
    "week_days",
    "shift_week",
    "half_hour_slots",
]
