"""The two availability operations every caller goes through.

``fetch_for_display`` returns identity fields plus saved slots for a scope;
``replace_on_save`` overwrites the scope's slot list and echoes what was
stored. ``AvailabilityGateway`` is the contract; ``AvailabilityService`` is
the database-backed implementation, and the candidate API's HTTP client is
the remote one.
"""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careers.core.metrics import record_load, record_save
from careers.core.result import Result, failure
from careers.domain.availability.types import AvailabilityScope, AvailabilitySnapshot, TimeSlot
from careers.domain.errors import AvailabilityFailure, StoreUnavailable
from careers.repositories.availability import AvailabilityRepository

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class AvailabilityGateway(Protocol):
    async def fetch_for_display(
        self, scope: AvailabilityScope
    ) -> Result[AvailabilitySnapshot, AvailabilityFailure]: ...

    async def replace_on_save(
        self, scope: AvailabilityScope, slots: Sequence[TimeSlot]
    ) -> Result[list[TimeSlot], AvailabilityFailure]: ...


def _outcome(result: Result) -> str:
    return "success" if result.is_success() else result.error.code


class AvailabilityService:
    """Database-backed gateway; one session and one transaction per call."""

    def __init__(self, session_factory: SessionFactory | None = None):
        if session_factory is None:
            from careers.core.db import async_session

            session_factory = async_session
        self._session_factory = session_factory

    async def fetch_for_display(
        self, scope: AvailabilityScope
    ) -> Result[AvailabilitySnapshot, AvailabilityFailure]:
        try:
            async with self._session_factory() as session:
                result = await AvailabilityRepository(session).get_snapshot(scope)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Availability fetch failed to open a session (%s)", scope, exc_info=True)
            result = failure(StoreUnavailable("Availability.fetch", str(exc), exc))

        record_load(_outcome(result))
        if result.is_success():
            logger.info(
                "Fetched availability (%s): %d slot(s)",
                scope,
                len(result.unwrap().time_slots),
                extra={"scope": str(scope), "slot_count": len(result.unwrap().time_slots)},
            )
        else:
            logger.warning(
                "Availability fetch failed (%s): %s",
                scope,
                result.error,
                extra={"scope": str(scope), "code": result.error.code},
            )
        return result

    async def replace_on_save(
        self, scope: AvailabilityScope, slots: Sequence[TimeSlot]
    ) -> Result[list[TimeSlot], AvailabilityFailure]:
        try:
            async with self._session_factory() as session:
                result = await AvailabilityRepository(session).save(scope, slots)
                if result.is_success():
                    await session.commit()
                else:
                    await session.rollback()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Availability save could not be committed (%s)", scope, exc_info=True)
            result = failure(StoreUnavailable("Availability.commit", str(exc), exc))

        if result.is_success():
            saved = result.unwrap()
            record_save("success", len(saved))
            logger.info(
                "Saved availability (%s): %d slot(s)",
                scope,
                len(saved),
                extra={"scope": str(scope), "slot_count": len(saved)},
            )
        else:
            record_save(result.error.code)
            logger.warning(
                "Availability save rejected (%s): %s",
                scope,
                result.error,
                extra={"scope": str(scope), "code": result.error.code},
            )
        return result


__all__ = ["AvailabilityGateway", "AvailabilityService"]
