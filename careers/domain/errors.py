"""Failure payloads and exceptions of the availability domain.

Store operations report ``ScopeNotFound``, ``InvalidRange`` and
``StoreUnavailable`` through ``Failure``; each carries a stable ``code`` that
the API and the editor switch on. ``MalformedKeyError`` is raised, not
returned: it means the grid and the codec disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


class MalformedKeyError(ValueError):
    """Raised when a slot key does not have the ``YYYY-MM-DD_HH:MM`` shape."""

    def __init__(self, key: object, reason: str = "unexpected shape"):
        self.key = key
        super().__init__(f"Malformed slot key {key!r}: {reason}")


@dataclass(frozen=True, slots=True)
class ScopeNotFound:
    """The application (or the interview within it) does not exist."""

    code: ClassVar[str] = "ScopeNotFound"
    retryable: ClassVar[bool] = False

    application_id: int
    interview_id: Optional[int] = None

    def __str__(self) -> str:
        if self.interview_id is not None:
            return "Application or interview not found"
        return "Application not found"


@dataclass(frozen=True, slots=True)
class InvalidRange:
    """A submitted time slot is malformed, inverted or overlaps another on its date."""

    code: ClassVar[str] = "InvalidRange"
    retryable: ClassVar[bool] = False

    index: int
    message: str
    value: Optional[str] = None

    def __str__(self) -> str:
        if self.value:
            return f"timeSlots[{self.index}]: {self.message} (got: {self.value})"
        return f"timeSlots[{self.index}]: {self.message}"


@dataclass(frozen=True, slots=True)
class StoreUnavailable:
    """Transient storage or network failure; retrying is safe."""

    code: ClassVar[str] = "StoreUnavailable"
    retryable: ClassVar[bool] = True

    operation: str
    message: str
    original_exception: Optional[Exception] = None

    def __str__(self) -> str:
        return f"Availability store unavailable during {self.operation}: {self.message}"


AvailabilityFailure = ScopeNotFound | InvalidRange | StoreUnavailable


__all__ = [
    "MalformedKeyError",
    "ScopeNotFound",
    "InvalidRange",
    "StoreUnavailable",
    "AvailabilityFailure",
]
