from datetime import date, datetime, timezone

import pytest
from sqlalchemy import select

from careers.core.db import async_session
from careers.domain.availability.types import AvailabilityScope, TimeSlot
from careers.domain.errors import InvalidRange, ScopeNotFound
from careers.domain.models import AvailabilitySlot, JobApplication
from careers.repositories.availability import UNKNOWN_POSITION, AvailabilityRepository


def _slots(*ranges, tz="Europe/Berlin"):
    return [TimeSlot(date(2025, 3, day), start, end, tz) for day, start, end in ranges]


@pytest.mark.asyncio
async def test_load_of_untouched_scope_is_empty(seeded):
    async with async_session() as session:
        result = await AvailabilityRepository(session).load(AvailabilityScope(seeded["application"]))
    assert result.is_success()
    assert result.unwrap() == []


@pytest.mark.asyncio
async def test_save_replaces_the_whole_list(seeded):
    scope = AvailabilityScope(seeded["application"])
    first = _slots((10, "09:00", "10:00"), (12, "14:00", "14:30"))
    second = _slots((11, "07:00", "08:00"))

    async with async_session() as session:
        repo = AvailabilityRepository(session)
        assert (await repo.save(scope, first)).unwrap() == first
        await session.commit()

    async with async_session() as session:
        repo = AvailabilityRepository(session)
        assert (await repo.save(scope, second)).unwrap() == second
        await session.commit()

    async with async_session() as session:
        assert (await AvailabilityRepository(session).load(scope)).unwrap() == second


@pytest.mark.asyncio
async def test_saved_order_is_preserved(seeded):
    scope = AvailabilityScope(seeded["application"])
    unordered = _slots((12, "14:00", "14:30"), (10, "09:00", "10:00"))
    async with async_session() as session:
        await AvailabilityRepository(session).save(scope, unordered)
        await session.commit()
    async with async_session() as session:
        assert (await AvailabilityRepository(session).load(scope)).unwrap() == unordered


@pytest.mark.asyncio
async def test_application_and_interview_scopes_are_isolated(seeded):
    app_scope = AvailabilityScope(seeded["application"])
    interview_scope = AvailabilityScope(seeded["application"], seeded["interview"])
    other_scope = AvailabilityScope(seeded["application"], seeded["other_interview"])

    async with async_session() as session:
        repo = AvailabilityRepository(session)
        await repo.save(app_scope, _slots((10, "09:00", "10:00")))
        await repo.save(interview_scope, _slots((11, "13:00", "15:00")))
        await session.commit()

    async with async_session() as session:
        repo = AvailabilityRepository(session)
        assert (await repo.load(app_scope)).unwrap() == _slots((10, "09:00", "10:00"))
        assert (await repo.load(interview_scope)).unwrap() == _slots((11, "13:00", "15:00"))
        assert (await repo.load(other_scope)).unwrap() == []


@pytest.mark.asyncio
async def test_missing_application_is_scope_not_found(seeded):
    async with async_session() as session:
        repo = AvailabilityRepository(session)
        result = await repo.save(AvailabilityScope(999_999), _slots((10, "09:00", "10:00")))
    assert result.is_failure()
    assert isinstance(result.error, ScopeNotFound)
    assert str(result.error) == "Application not found"


@pytest.mark.asyncio
async def test_interview_of_another_application_is_scope_not_found(seeded):
    scope = AvailabilityScope(seeded["application"], seeded["foreign_interview"])
    async with async_session() as session:
        result = await AvailabilityRepository(session).load(scope)
    assert isinstance(result.error, ScopeNotFound)
    assert str(result.error) == "Application or interview not found"


@pytest.mark.asyncio
async def test_invalid_range_leaves_stored_list_untouched(seeded):
    scope = AvailabilityScope(seeded["application"])
    stored = _slots((10, "09:00", "10:00"))
    async with async_session() as session:
        await AvailabilityRepository(session).save(scope, stored)
        await session.commit()

    async with async_session() as session:
        result = await AvailabilityRepository(session).save(
            scope, stored + _slots((11, "12:00", "11:00"))
        )
        assert isinstance(result.error, InvalidRange)
        assert result.error.index == 1
        await session.rollback()

    async with async_session() as session:
        rows = (await session.execute(select(AvailabilitySlot))).scalars().all()
        assert len(rows) == 1


@pytest.mark.asyncio
async def test_save_touches_application_updated_at(seeded):
    scope = AvailabilityScope(seeded["application"])
    async with async_session() as session:
        await AvailabilityRepository(session).save(scope, _slots((10, "09:00", "10:00")))
        await session.commit()

    async with async_session() as session:
        application = await session.get(JobApplication, seeded["application"])
        updated_at = application.updated_at
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)
        assert updated_at > datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_snapshot_for_application_scope(seeded):
    scope = AvailabilityScope(seeded["application"])
    async with async_session() as session:
        result = await AvailabilityRepository(session).get_snapshot(scope)

    snapshot = result.unwrap()
    assert snapshot.applicant.full_name == "Ada Lovelace"
    assert snapshot.applicant.job_title == "Backend Engineer"
    assert snapshot.applicant.stage == "Technical Interview"
    assert snapshot.interview is None
    assert snapshot.time_slots == []


@pytest.mark.asyncio
async def test_snapshot_for_interview_scope_includes_details(seeded):
    scope = AvailabilityScope(seeded["application"], seeded["interview"])
    async with async_session() as session:
        snapshot = (await AvailabilityRepository(session).get_snapshot(scope)).unwrap()

    assert snapshot.interview.title == "Technical deep dive"
    assert snapshot.interview.location == "Video call"
    assert snapshot.interview.stage == "Technical Interview"
    assert snapshot.interview.duration_minutes == 90


@pytest.mark.asyncio
async def test_snapshot_interview_duration_falls_back_to_first_stage(seeded):
    scope = AvailabilityScope(seeded["application"], seeded["other_interview"])
    async with async_session() as session:
        snapshot = (await AvailabilityRepository(session).get_snapshot(scope)).unwrap()
    assert snapshot.interview.duration_minutes == 30


@pytest.mark.asyncio
async def test_snapshot_without_job(seeded):
    scope = AvailabilityScope(seeded["orphan_application"], seeded["foreign_interview"])
    async with async_session() as session:
        snapshot = (await AvailabilityRepository(session).get_snapshot(scope)).unwrap()
    assert snapshot.applicant.job_title == UNKNOWN_POSITION
    assert snapshot.applicant.stage == "Interviewing"
    assert snapshot.interview.duration_minutes == 60
