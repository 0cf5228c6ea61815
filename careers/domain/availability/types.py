from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AvailabilityScope:
    """Which availability list an operation targets."""

    application_id: int
    interview_id: Optional[int] = None

    def __str__(self) -> str:
        if self.interview_id is None:
            return f"application={self.application_id}"
        return f"application={self.application_id} interview={self.interview_id}"


@dataclass(frozen=True)
class TimeSlot:
    """A persisted availability range ``[start_time, end_time)`` on one date."""

    date: date
    start_time: str
    end_time: str
    timezone: str


@dataclass(frozen=True)
class ApplicantSummary:
    first_name: str
    last_name: str
    job_title: str
    stage: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class InterviewDetails:
    title: str
    description: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    location: Optional[str] = None
    stage: Optional[str] = None
    duration_minutes: int = 60


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """Everything the availability page shows for one scope."""

    applicant: ApplicantSummary
    time_slots: list[TimeSlot] = field(default_factory=list)
    interview: Optional[InterviewDetails] = None


__all__ = [
    "AvailabilityScope",
    "TimeSlot",
    "ApplicantSummary",
    "InterviewDetails",
    "AvailabilitySnapshot",
]
