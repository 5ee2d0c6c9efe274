"""
In-progress booking selection held by the client.

The draft collects duration, date, time slot and notes. Selections are
validated as they are made; a rejected selection leaves the draft unchanged
and returns a message for the user. Once submitted the draft is frozen.

Usage:
    draft = BookingDraft("consultant-1", profile)
    draft.set_duration(60)
    draft.select_date(candidate)
    draft.select_slot(slot)
    draft.freeze()
"""

import logging
from datetime import date, datetime
from typing import Any, Optional, Union

from consult_booking.planner.dates import CandidateDate
from consult_booking.planner.pricing import (
    SessionDuration,
    SessionType,
    is_free_trial_eligible,
)
from consult_booking.planner.slots import TimeSlot
from consult_booking.schemas.client_schema import ClientProfile

logger = logging.getLogger(__name__)

DEFAULT_CONSULTATION_DETAIL = "General consultation"


class BookingDraft:
    """Mutable selection state until submission."""

    def __init__(
        self,
        consultant_id: str,
        profile: Optional[ClientProfile] = None,
        session_type: SessionType = SessionType.VIDEO,
    ) -> None:
        self.consultant_id = consultant_id
        self.profile = profile
        self.session_type = SessionType(session_type)
        self.duration: SessionDuration = SessionDuration.SHORT
        self.selected_date: Optional[date] = None
        self.selected_slot: Optional[TimeSlot] = None
        self.notes: str = ""
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("Booking draft has already been submitted")

    def set_duration(self, value: Any) -> tuple[bool, str]:
        self._ensure_mutable()
        try:
            duration = SessionDuration(int(value))
        except (TypeError, ValueError):
            return False, f"'{value}' is not an available session length."

        if duration is SessionDuration.FREE_TRIAL and not is_free_trial_eligible(
            self.profile, self.session_type
        ):
            return False, f"Your free {self.session_type.value} trial has already been used."

        self.duration = duration
        return True, f"Session length set to {int(duration)} minutes."

    def select_date(self, value: Union[date, CandidateDate]) -> tuple[bool, str]:
        """Choose a date; any previously chosen time is cleared."""
        self._ensure_mutable()
        if isinstance(value, CandidateDate):
            if not value.is_selectable:
                return False, f"{value.display_date} is not available for booking."
            value = value.calendar_date

        if value != self.selected_date:
            self.selected_slot = None
        self.selected_date = value
        logger.debug("Draft date set to %s", value.isoformat())
        return True, f"Date set to {value.isoformat()}."

    def select_slot(self, slot: TimeSlot) -> tuple[bool, str]:
        self._ensure_mutable()
        if self.selected_date is None:
            return False, "Please pick a date first."
        if slot.start_datetime.date() != self.selected_date:
            return False, f"{slot.display_label} is not a slot on the selected date."
        self.selected_slot = slot
        return True, f"Time set to {slot.display_label}."

    def set_notes(self, text: str) -> None:
        self._ensure_mutable()
        self.notes = text or ""

    @property
    def consultation_detail(self) -> str:
        return self.notes.strip() or DEFAULT_CONSULTATION_DETAIL

    def start_datetime(self) -> Optional[datetime]:
        """Selected date combined with the selected slot's time."""
        if self.selected_date is None or self.selected_slot is None:
            return None
        return self.selected_slot.start_datetime

    def is_complete(self) -> bool:
        return self.start_datetime() is not None

    def freeze(self) -> None:
        self._frozen = True
        logger.info("Booking draft frozen for consultant %s", self.consultant_id)

    def unfreeze(self) -> None:
        """Reopen the draft after a submission the backend did not accept.

        Selections are kept so the client can pick another slot.
        """
        self._frozen = False

    def reset(self) -> None:
        """Clear every selection, including after a submission."""
        self._frozen = False
        self.duration = SessionDuration.SHORT
        self.selected_date = None
        self.selected_slot = None
        self.notes = ""
