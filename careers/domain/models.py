from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)

    stages: Mapped[List["PipelineStage"]] = relationship(
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="PipelineStage.position",
    )

    def __repr__(self) -> str:
        return f"<Job {self.id} {self.title}>"


class PipelineStage(Base):
    """A custom interview-process stage; applications reference it by ``key``."""

    __tablename__ = "pipeline_stages"
    __table_args__ = (UniqueConstraint("job_id", "key", name="uq_pipeline_stage_job_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    job: Mapped["Job"] = relationship(back_populates="stages")

    def __repr__(self) -> str:
        return f"<PipelineStage {self.key} {self.title!r} job={self.job_id}>"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    job_id: Mapped[Optional[int]] = mapped_column(ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True)
    status: Mapped[str] = mapped_column(String(64), default="new", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    job: Mapped[Optional["Job"]] = relationship()
    interviews: Mapped[List["ApplicationInterview"]] = relationship(
        back_populates="application",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<JobApplication {self.id} status={self.status}>"


class ApplicationInterview(Base):
    __tablename__ = "application_interviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    application_id: Mapped[int] = mapped_column(
        ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    stage: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    application: Mapped["JobApplication"] = relationship(back_populates="interviews")

    def __repr__(self) -> str:
        return f"<ApplicationInterview {self.id} app={self.application_id}>"


class AvailabilitySlot(Base):
    """One persisted availability range; ``interview_id`` NULL means application scope."""

    __tablename__ = "availability_slots"
    __table_args__ = (
        Index("ix_availability_slots_scope", "application_id", "interview_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    application_id: Mapped[int] = mapped_column(
        ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False
    )
    interview_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("application_interviews.id", ondelete="CASCADE"), nullable=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    slot_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySlot app={self.application_id} interview={self.interview_id} "
            f"{self.slot_date} {self.start_time}-{self.end_time}>"
        )


__all__ = [
    "Job",
    "PipelineStage",
    "JobApplication",
    "ApplicationInterview",
    "AvailabilitySlot",
]
