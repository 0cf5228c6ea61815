from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careers.domain.availability.types import (
    ApplicantSummary,
    AvailabilitySnapshot,
    InterviewDetails,
    TimeSlot,
)

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TimeSlotPayload(BaseModel):
    """One availability range as it travels over the wire (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    slot_date: date = Field(alias="date")
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    timezone: Optional[str] = None

    @field_validator("slot_date", mode="before")
    @classmethod
    def calendar_date_only(cls, value: object) -> object:
        # Timestamps and datetime strings are not dates.
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, str) and _ISO_DATE.fullmatch(value):
            return value
        raise ValueError("date must be YYYY-MM-DD")

    @classmethod
    def from_domain(cls, slot: TimeSlot) -> "TimeSlotPayload":
        return cls(
            slot_date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            timezone=slot.timezone,
        )

    def to_domain(self, default_timezone: str) -> TimeSlot:
        return TimeSlot(
            date=self.slot_date,
            start_time=self.start_time,
            end_time=self.end_time,
            timezone=self.timezone or default_timezone,
        )


class InterviewPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    scheduled_date: Optional[datetime] = Field(default=None, alias="scheduledDate")
    location: Optional[str] = None
    stage: Optional[str] = None
    duration_minutes: int = Field(default=60, alias="durationMinutes")

    @classmethod
    def from_domain(cls, details: InterviewDetails) -> "InterviewPayload":
        return cls(
            title=details.title,
            description=details.description,
            scheduled_date=details.scheduled_at,
            location=details.location,
            stage=details.stage,
            duration_minutes=details.duration_minutes,
        )

    def to_domain(self) -> InterviewDetails:
        return InterviewDetails(
            title=self.title,
            description=self.description,
            scheduled_at=self.scheduled_date,
            location=self.location,
            stage=self.stage,
            duration_minutes=self.duration_minutes,
        )


class AvailabilityResponse(BaseModel):
    """Body of ``GET /api/timeslots/...``; ``status`` carries the stage label."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    status: str
    job_title: str = Field(alias="jobTitle")
    available_time_slots: list[TimeSlotPayload] = Field(default_factory=list, alias="availableTimeSlots")
    interview: Optional[InterviewPayload] = None

    @classmethod
    def from_snapshot(cls, snapshot: AvailabilitySnapshot) -> "AvailabilityResponse":
        applicant = snapshot.applicant
        return cls(
            first_name=applicant.first_name,
            last_name=applicant.last_name,
            status=applicant.stage,
            job_title=applicant.job_title,
            available_time_slots=[TimeSlotPayload.from_domain(slot) for slot in snapshot.time_slots],
            interview=InterviewPayload.from_domain(snapshot.interview) if snapshot.interview else None,
        )

    def to_snapshot(self, default_timezone: str) -> AvailabilitySnapshot:
        return AvailabilitySnapshot(
            applicant=ApplicantSummary(
                first_name=self.first_name,
                last_name=self.last_name,
                job_title=self.job_title,
                stage=self.status,
            ),
            time_slots=[slot.to_domain(default_timezone) for slot in self.available_time_slots],
            interview=self.interview.to_domain() if self.interview else None,
        )

    def to_json(self) -> dict:
        payload = self.model_dump(mode="json", by_alias=True)
        if payload["interview"] is None:
            payload.pop("interview")
        return payload


class SaveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Time slots saved successfully"
    available_time_slots: list[TimeSlotPayload] = Field(default_factory=list, alias="availableTimeSlots")


class ErrorResponse(BaseModel):
    error: str
    code: str
    index: Optional[int] = None


__all__ = [
    "TimeSlotPayload",
    "InterviewPayload",
    "AvailabilityResponse",
    "SaveResponse",
    "ErrorResponse",
]
