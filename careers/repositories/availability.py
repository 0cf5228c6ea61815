"""Availability persistence: scope lookup, slot loading, full-list replacement."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careers.core.result import Result, failure, success
from careers.domain.availability.types import (
    ApplicantSummary,
    AvailabilityScope,
    AvailabilitySnapshot,
    InterviewDetails,
    TimeSlot,
)
from careers.domain.availability.validation import validate_time_slots
from careers.domain.errors import InvalidRange, ScopeNotFound, StoreUnavailable
from careers.domain.models import (
    ApplicationInterview,
    AvailabilitySlot,
    JobApplication,
    PipelineStage,
)
from careers.domain.stages import resolve_interview_duration, resolve_stage_label

logger = logging.getLogger(__name__)

UNKNOWN_POSITION = "Unknown Position"


class AvailabilityRepository:
    """
    Reads and replaces the availability list of one scope.

    Application-level availability is stored with ``interview_id`` NULL; each
    interview of a multi-interview application has its own rows. Queries always
    filter on both columns so the two never mix.

    Nothing here commits: the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_scope(
        self, scope: AvailabilityScope
    ) -> Result[tuple[JobApplication, Optional[ApplicationInterview]], ScopeNotFound]:
        stmt = (
            select(JobApplication)
            .where(JobApplication.id == scope.application_id)
            .options(selectinload(JobApplication.job))
        )
        application = (await self.session.execute(stmt)).scalar_one_or_none()
        if application is None:
            return failure(ScopeNotFound(scope.application_id, scope.interview_id))

        interview = None
        if scope.interview_id is not None:
            interview = (
                await self.session.execute(
                    select(ApplicationInterview).where(
                        ApplicationInterview.id == scope.interview_id,
                        ApplicationInterview.application_id == scope.application_id,
                    )
                )
            ).scalar_one_or_none()
            if interview is None:
                return failure(ScopeNotFound(scope.application_id, scope.interview_id))
        return success((application, interview))

    def _scope_filter(self, scope: AvailabilityScope):
        if scope.interview_id is None:
            interview_clause = AvailabilitySlot.interview_id.is_(None)
        else:
            interview_clause = AvailabilitySlot.interview_id == scope.interview_id
        return (AvailabilitySlot.application_id == scope.application_id, interview_clause)

    async def _stages_for(self, application: JobApplication) -> Sequence[PipelineStage]:
        if application.job_id is None:
            return []
        stmt = (
            select(PipelineStage)
            .where(PipelineStage.job_id == application.job_id)
            .order_by(PipelineStage.position.asc(), PipelineStage.id.asc())
        )
        return (await self.session.execute(stmt)).scalars().all()

    async def _rows(self, scope: AvailabilityScope) -> list[TimeSlot]:
        stmt = (
            select(AvailabilitySlot)
            .where(*self._scope_filter(scope))
            .order_by(AvailabilitySlot.position.asc(), AvailabilitySlot.id.asc())
        )
        rows = (await self.session.execute(stmt)).scalars().all()
        return [
            TimeSlot(
                date=row.slot_date,
                start_time=row.start_time,
                end_time=row.end_time,
                timezone=row.timezone,
            )
            for row in rows
        ]

    async def load(
        self, scope: AvailabilityScope
    ) -> Result[list[TimeSlot], ScopeNotFound | StoreUnavailable]:
        """Saved slots for ``scope``; an empty list means nothing was saved yet."""
        try:
            found = await self._find_scope(scope)
            if found.is_failure():
                return found
            return success(await self._rows(scope))
        except SQLAlchemyError as exc:
            logger.error("Database error loading availability (%s)", scope, exc_info=True)
            return failure(StoreUnavailable("Availability.load", str(exc), exc))

    async def get_snapshot(
        self, scope: AvailabilityScope
    ) -> Result[AvailabilitySnapshot, ScopeNotFound | StoreUnavailable]:
        """Identity fields, optional interview details and saved slots for ``scope``."""
        try:
            found = await self._find_scope(scope)
            if found.is_failure():
                return found
            application, interview = found.unwrap()
            stages = await self._stages_for(application)

            applicant = ApplicantSummary(
                first_name=application.first_name,
                last_name=application.last_name,
                job_title=application.job.title if application.job else UNKNOWN_POSITION,
                stage=resolve_stage_label(application.status, stages),
            )
            details = None
            if interview is not None:
                details = InterviewDetails(
                    title=interview.title,
                    description=interview.description,
                    scheduled_at=interview.scheduled_at,
                    location=interview.location,
                    stage=interview.stage,
                    duration_minutes=resolve_interview_duration(interview.stage, stages),
                )
            return success(
                AvailabilitySnapshot(
                    applicant=applicant,
                    time_slots=await self._rows(scope),
                    interview=details,
                )
            )
        except SQLAlchemyError as exc:
            logger.error("Database error fetching availability snapshot (%s)", scope, exc_info=True)
            return failure(StoreUnavailable("Availability.get_snapshot", str(exc), exc))

    async def save(
        self, scope: AvailabilityScope, slots: Sequence[TimeSlot]
    ) -> Result[list[TimeSlot], ScopeNotFound | InvalidRange | StoreUnavailable]:
        """
        Replace the whole slot list of ``scope`` with ``slots``.

        Validation runs before any write, so an invalid list leaves the stored
        one untouched.
        """
        validated = validate_time_slots(slots)
        if validated.is_failure():
            return validated

        try:
            found = await self._find_scope(scope)
            if found.is_failure():
                return found
            application, _interview = found.unwrap()

            await self.session.execute(delete(AvailabilitySlot).where(*self._scope_filter(scope)))
            self.session.add_all(
                [
                    AvailabilitySlot(
                        application_id=scope.application_id,
                        interview_id=scope.interview_id,
                        position=position,
                        slot_date=slot.date,
                        start_time=slot.start_time,
                        end_time=slot.end_time,
                        timezone=slot.timezone,
                    )
                    for position, slot in enumerate(validated.unwrap())
                ]
            )
            application.updated_at = datetime.now(timezone.utc)
            await self.session.flush()
            return success(await self._rows(scope))
        except SQLAlchemyError as exc:
            logger.error("Database error saving availability (%s)", scope, exc_info=True)
            return failure(StoreUnavailable("Availability.save", str(exc), exc))


__all__ = ["AvailabilityRepository", "UNKNOWN_POSITION"]
