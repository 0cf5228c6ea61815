"""Candidate-facing availability endpoints.

``GET`` returns identity fields and saved ranges for a scope; ``PUT`` replaces
the scope's whole list with ``{"timeSlots": [...]}``. Both exist once for the
application and once per interview of the application.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from careers.apps.candidate_api.schemas import (
    AvailabilityResponse,
    ErrorResponse,
    SaveResponse,
    TimeSlotPayload,
)
from careers.core.result import Result, collect_results, failure, success
from careers.core.settings import get_settings
from careers.domain.availability.service import AvailabilityGateway
from careers.domain.availability.types import AvailabilityScope, TimeSlot
from careers.domain.errors import (
    AvailabilityFailure,
    InvalidRange,
    ScopeNotFound,
    StoreUnavailable,
)

router = APIRouter(prefix="/api/timeslots", tags=["timeslots"])

INVALID_IDENTIFIER = "InvalidIdentifier"
INVALID_BODY = "InvalidBody"

_ID_RE = re.compile(r"[0-9]{1,18}")

_STATUS_BY_FAILURE = {
    ScopeNotFound: 404,
    InvalidRange: 400,
    StoreUnavailable: 503,
}


def get_availability_gateway(request: Request) -> AvailabilityGateway:
    return request.app.state.availability_gateway


def _error(status_code: int, message: str, code: str, index: Optional[int] = None) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, index=index)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


def _failure_response(error: AvailabilityFailure) -> JSONResponse:
    index = error.index if isinstance(error, InvalidRange) else None
    message = str(error)
    if isinstance(error, StoreUnavailable):
        # Driver messages stay in the logs.
        message = "Availability is temporarily unavailable, please try again"
    return _error(_STATUS_BY_FAILURE[type(error)], message, error.code, index)


def _parse_id(raw: str) -> Optional[int]:
    if not _ID_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value > 0 else None


def _resolve_scope(application_id: str, interview_id: Optional[str] = None) -> AvailabilityScope | JSONResponse:
    parsed_application = _parse_id(application_id)
    if parsed_application is None:
        return _error(400, "Invalid application ID format", INVALID_IDENTIFIER)
    if interview_id is None:
        return AvailabilityScope(parsed_application)
    parsed_interview = _parse_id(interview_id)
    if parsed_interview is None:
        return _error(400, "Invalid interview ID format", INVALID_IDENTIFIER)
    return AvailabilityScope(parsed_application, parsed_interview)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def parse_time_slots(raw: Any, default_timezone: str) -> Result[list[TimeSlot], InvalidRange]:
    """Turn the decoded ``timeSlots`` array into domain slots, failing on the first bad entry."""
    results = []
    for index, item in enumerate(raw):
        try:
            payload = TimeSlotPayload.model_validate(item)
        except ValidationError as exc:
            results.append(failure(InvalidRange(index, _describe(exc))))
            continue
        results.append(success(payload.to_domain(default_timezone)))
    return collect_results(results)


async def _read_time_slots(request: Request) -> list[TimeSlot] | JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Request body must be JSON", INVALID_BODY)

    raw = body.get("timeSlots") if isinstance(body, dict) else None
    if not isinstance(raw, list):
        return _error(400, "Invalid time slots format", INVALID_BODY)

    parsed = parse_time_slots(raw, get_settings().timezone)
    if parsed.is_failure():
        return _failure_response(parsed.error)
    return parsed.unwrap()


async def _fetch(scope: AvailabilityScope, gateway: AvailabilityGateway) -> JSONResponse:
    result = await gateway.fetch_for_display(scope)
    if result.is_failure():
        return _failure_response(result.error)
    return JSONResponse(AvailabilityResponse.from_snapshot(result.unwrap()).to_json())


async def _replace(scope: AvailabilityScope, request: Request, gateway: AvailabilityGateway) -> JSONResponse:
    slots = await _read_time_slots(request)
    if isinstance(slots, JSONResponse):
        return slots

    result = await gateway.replace_on_save(scope, slots)
    if result.is_failure():
        return _failure_response(result.error)
    body = SaveResponse(
        available_time_slots=[TimeSlotPayload.from_domain(slot) for slot in result.unwrap()]
    )
    return JSONResponse(body.model_dump(mode="json", by_alias=True))


@router.get("/{application_id}")
async def get_application_availability(
    application_id: str,
    gateway: AvailabilityGateway = Depends(get_availability_gateway),
) -> JSONResponse:
    scope = _resolve_scope(application_id)
    if isinstance(scope, JSONResponse):
        return scope
    return await _fetch(scope, gateway)


@router.put("/{application_id}")
async def save_application_availability(
    application_id: str,
    request: Request,
    gateway: AvailabilityGateway = Depends(get_availability_gateway),
) -> JSONResponse:
    scope = _resolve_scope(application_id)
    if isinstance(scope, JSONResponse):
        return scope
    return await _replace(scope, request, gateway)


@router.get("/{application_id}/interview/{interview_id}")
async def get_interview_availability(
    application_id: str,
    interview_id: str,
    gateway: AvailabilityGateway = Depends(get_availability_gateway),
) -> JSONResponse:
    scope = _resolve_scope(application_id, interview_id)
    if isinstance(scope, JSONResponse):
        return scope
    return await _fetch(scope, gateway)


@router.put("/{application_id}/interview/{interview_id}")
async def save_interview_availability(
    application_id: str,
    interview_id: str,
    request: Request,
    gateway: AvailabilityGateway = Depends(get_availability_gateway),
) -> JSONResponse:
    scope = _resolve_scope(application_id, interview_id)
    if isinstance(scope, JSONResponse):
        return scope
    return await _replace(scope, request, gateway)


__all__ = ["router", "get_availability_gateway", "parse_time_slots"]
