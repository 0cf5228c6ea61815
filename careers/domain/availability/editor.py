"""Editing session for one candidate's availability page.

Transition table::

    LOADING --load ok, no slots----> EDIT
    LOADING --load ok, slots-------> VIEW
    LOADING --load failed----------> LOAD_FAILED   (load() may be retried)
    VIEW    --begin_edit-----------> EDIT
    EDIT    --cancel (saved data)--> VIEW          (selection reverts)
    EDIT    --save ok--------------> VIEW
    EDIT    --save failed----------> EDIT          (selection kept, error set)

Transition methods return False instead of raising when the current state
does not allow them, the way a disabled button does nothing.
"""

from __future__ import annotations

import enum
import logging
from datetime import date
from typing import Optional

from careers.core.result import Result
from careers.domain.availability import week_grid
from careers.domain.availability.ranges import (
    format_time_ranges,
    keys_to_time_slots,
    time_slots_to_keys,
)
from careers.domain.availability.selection import SelectionSet
from careers.domain.availability.service import AvailabilityGateway
from careers.domain.availability.slot_keys import encode
from careers.domain.availability.types import (
    ApplicantSummary,
    AvailabilityScope,
    InterviewDetails,
    TimeSlot,
)
from careers.domain.errors import AvailabilityFailure, ScopeNotFound

logger = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "Time slots saved successfully!"


class EditorMode(str, enum.Enum):
    LOADING = "loading"
    LOAD_FAILED = "load_failed"
    VIEW = "view"
    EDIT = "edit"


class AvailabilityEditor:
    def __init__(
        self,
        gateway: AvailabilityGateway,
        scope: AvailabilityScope,
        *,
        timezone: str,
        today: Optional[date] = None,
    ):
        self.gateway = gateway
        self.scope = scope
        self.timezone = timezone
        self.mode = EditorMode.LOADING
        self.week_anchor = week_grid.start_of_week(today or date.today())
        self.applicant: Optional[ApplicantSummary] = None
        self.interview: Optional[InterviewDetails] = None
        self.saved_slots: list[TimeSlot] = []
        self.selection = SelectionSet()
        self.is_dragging = False
        self.is_saving = False
        self.error: Optional[str] = None
        self.error_code: Optional[str] = None
        self.success_message: Optional[str] = None
        self.scope_missing = False

    # -- loading -----------------------------------------------------------

    async def load(self) -> Result:
        self.mode = EditorMode.LOADING
        self.error = self.error_code = None
        result = await self.gateway.fetch_for_display(self.scope)
        if result.is_failure():
            self._surface(result.error)
            self.mode = EditorMode.LOAD_FAILED
            return result

        snapshot = result.unwrap()
        self.applicant = snapshot.applicant
        self.interview = snapshot.interview
        self._adopt(snapshot.time_slots)
        self.mode = EditorMode.VIEW if self.saved_slots else EditorMode.EDIT
        logger.debug("Editor loaded (%s) in %s mode", self.scope, self.mode.value)
        return result

    def _adopt(self, slots: list[TimeSlot]) -> None:
        self.saved_slots = list(slots)
        self.selection = SelectionSet(time_slots_to_keys(slots))

    def _surface(self, error: AvailabilityFailure) -> None:
        self.error = str(error)
        self.error_code = error.code
        if isinstance(error, ScopeNotFound):
            self.scope_missing = True

    # -- mode transitions --------------------------------------------------

    def begin_edit(self) -> bool:
        if self.mode is not EditorMode.VIEW:
            return False
        self.mode = EditorMode.EDIT
        self.success_message = None
        return True

    @property
    def can_cancel(self) -> bool:
        return self.mode is EditorMode.EDIT and bool(self.saved_slots) and not self.is_saving

    def cancel(self) -> bool:
        """Drop unsaved picks and go back to the last saved list."""
        if not self.can_cancel:
            return False
        self._adopt(self.saved_slots)
        self.is_dragging = False
        self.error = self.error_code = None
        self.mode = EditorMode.VIEW
        return True

    # -- grid interaction --------------------------------------------------

    @property
    def accepts_input(self) -> bool:
        return self.mode is EditorMode.EDIT and not self.is_saving

    def toggle(self, day: date, start_time: str) -> bool:
        if not self.accepts_input:
            return False
        self.selection.toggle(encode(day, start_time))
        return True

    def press(self, day: date, start_time: str) -> bool:
        """Pointer down on a cell: flip it and start a drag."""
        if not self.toggle(day, start_time):
            return False
        self.is_dragging = True
        return True

    def enter(self, day: date, start_time: str) -> bool:
        """Pointer moved onto a cell; only adds while a drag is active."""
        if not (self.is_dragging and self.accepts_input):
            return False
        self.selection.drag_extend(encode(day, start_time))
        return True

    def release(self) -> None:
        """Pointer released anywhere, on a cell or not."""
        self.is_dragging = False

    # -- week navigation ---------------------------------------------------

    def next_week(self) -> date:
        self.week_anchor = week_grid.shift_week(self.week_anchor, 1)
        return self.week_anchor

    def previous_week(self) -> date:
        self.week_anchor = week_grid.shift_week(self.week_anchor, -1)
        return self.week_anchor

    @property
    def visible_days(self) -> list[date]:
        return week_grid.week_days(self.week_anchor)

    @property
    def time_rows(self) -> list[str]:
        return week_grid.half_hour_slots()

    def is_selected(self, day: date, start_time: str) -> bool:
        return encode(day, start_time) in self.selection

    # -- saving ------------------------------------------------------------

    @property
    def can_save(self) -> bool:
        return (
            self.mode is EditorMode.EDIT
            and bool(self.selection)
            and not self.is_saving
            and not self.scope_missing
        )

    @property
    def save_label(self) -> str:
        if self.is_saving:
            return "Saving..."
        count = len(self.selection)
        return f"Save {count} Time Slot{'' if count == 1 else 's'}"

    def pending_time_slots(self) -> list[TimeSlot]:
        return keys_to_time_slots(self.selection.keys(), self.timezone)

    async def save(self) -> Optional[Result]:
        """Persist the selection; returns None without calling the store when disabled."""
        if not self.can_save:
            return None

        slots = self.pending_time_slots()
        self.is_saving = True
        self.is_dragging = False
        self.error = self.error_code = None
        self.success_message = None
        try:
            result = await self.gateway.replace_on_save(self.scope, slots)
        finally:
            self.is_saving = False

        if result.is_failure():
            self._surface(result.error)
            logger.info("Save failed (%s): %s; selection kept", self.scope, result.error.code)
            return result

        self._adopt(result.unwrap())
        self.success_message = SAVE_SUCCESS_MESSAGE
        self.mode = EditorMode.VIEW
        return result

    # -- view mode ---------------------------------------------------------

    def grouped_ranges(self) -> list[tuple[date, str]]:
        """Per date, the selection rendered as ``"09:00 - 10:30, 14:00 - 14:30"``."""
        return [
            (day, format_time_ranges(start_times))
            for day, start_times in self.selection.group_by_date().items()
        ]


__all__ = ["AvailabilityEditor", "EditorMode", "SAVE_SUCCESS_MESSAGE"]
