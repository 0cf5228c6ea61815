"""HTTP client for the candidate availability API.

``CandidateApiClient`` satisfies ``AvailabilityGateway``, so the editor can
run against a remote API exactly as it runs against the database service.
Every outcome comes back as a ``Result``; nothing raises past this module.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import aiohttp
from pydantic import ValidationError

from careers.apps.candidate_api.schemas import (
    AvailabilityResponse,
    SaveResponse,
    TimeSlotPayload,
)
from careers.core.result import Result, failure, success
from careers.core.settings import get_settings
from careers.domain.availability.types import AvailabilityScope, AvailabilitySnapshot, TimeSlot
from careers.domain.errors import (
    AvailabilityFailure,
    InvalidRange,
    ScopeNotFound,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)


def scope_path(scope: AvailabilityScope) -> str:
    path = f"/api/timeslots/{scope.application_id}"
    if scope.interview_id is not None:
        path += f"/interview/{scope.interview_id}"
    return path


class CandidateApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        default_timezone: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.candidate_api_url).strip().rstrip("/")
        self._timeout = timeout if timeout is not None else settings.candidate_api_timeout
        self._default_timezone = default_timezone or settings.timezone
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def _request(
        self, operation: str, method: str, path: str, payload: Optional[dict] = None
    ) -> Result[tuple[int, Any], StoreUnavailable]:
        url = f"{self._base_url}{path}"
        session = self._get_session()
        try:
            async with session.request(method, url, json=payload) as resp:
                status = resp.status
                try:
                    data = await resp.json(content_type=None)
                except ValueError:
                    data = {"error": await resp.text()}
                return success((status, data))
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("%s %s failed: %r", method, url, exc)
            return failure(StoreUnavailable(operation, str(exc) or type(exc).__name__, exc))

    def _map_error(
        self, operation: str, scope: AvailabilityScope, status: int, data: Any
    ) -> AvailabilityFailure:
        body = data if isinstance(data, dict) else {}
        message = str(body.get("error") or f"HTTP {status}")
        if status == 404:
            return ScopeNotFound(scope.application_id, scope.interview_id)
        if status == 400 and body.get("code") == InvalidRange.code:
            index = body.get("index")
            if not isinstance(index, int) or isinstance(index, bool):
                index = -1
            return InvalidRange(index, message)
        if status == 400:
            # Malformed ids or body: the request never reached the store.
            return InvalidRange(-1, message)
        return StoreUnavailable(operation, message)

    async def fetch_for_display(
        self, scope: AvailabilityScope
    ) -> Result[AvailabilitySnapshot, AvailabilityFailure]:
        operation = "CandidateApi.fetch"
        response = await self._request(operation, "GET", scope_path(scope))
        if response.is_failure():
            return response
        status, data = response.unwrap()
        if status != 200:
            return failure(self._map_error(operation, scope, status, data))
        try:
            parsed = AvailabilityResponse.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected availability payload for %s: %s", scope, exc)
            return failure(StoreUnavailable(operation, "unexpected response payload", exc))
        return success(parsed.to_snapshot(self._default_timezone))

    async def replace_on_save(
        self, scope: AvailabilityScope, slots: Sequence[TimeSlot]
    ) -> Result[list[TimeSlot], AvailabilityFailure]:
        operation = "CandidateApi.save"
        payload = {
            "timeSlots": [
                TimeSlotPayload.from_domain(slot).model_dump(mode="json", by_alias=True)
                for slot in slots
            ]
        }
        response = await self._request(operation, "PUT", scope_path(scope), payload)
        if response.is_failure():
            return response
        status, data = response.unwrap()
        if status != 200:
            return failure(self._map_error(operation, scope, status, data))
        try:
            parsed = SaveResponse.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected save payload for %s: %s", scope, exc)
            return failure(StoreUnavailable(operation, "unexpected response payload", exc))
        return success([slot.to_domain(self._default_timezone) for slot in parsed.available_time_slots])

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "CandidateApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


__all__ = ["CandidateApiClient", "scope_path"]
