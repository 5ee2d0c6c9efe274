"""
Pre-submission checks for a booking draft.

Four independent guards, each checking a different concern:
1. AuthGuard: a logged-in client is required
2. SelectionGuard: both a date and a time slot must be chosen
3. SelfBookingGuard: consultants cannot book themselves
4. LeadTimeGuard: the slot must still start at least the lead time from now

Slots were filtered for lead time when they were generated, but time passes
between rendering the list and tapping "Book", so the lead time is checked
again here against the submission-time clock.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from consult_booking.config import settings
from consult_booking.planner.draft import BookingDraft
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.utils import floor_to_minute

logger = logging.getLogger(__name__)


@dataclass
class GuardResult:
    """Outcome of a single guard check."""
    passed: bool
    violation_type: Optional[str] = None
    message: Optional[str] = None
    severity: str = "block"  # "block" | "login"


class AuthGuard:
    def check(self, user: Optional[ClientProfile]) -> GuardResult:
        if user is None or not user.user_id:
            return GuardResult(
                passed=False,
                violation_type="login_required",
                message="Please login to book a consultation.",
                severity="login",
            )
        return GuardResult(passed=True)


class SelectionGuard:
    def check(self, draft: BookingDraft) -> GuardResult:
        if not draft.is_complete():
            return GuardResult(
                passed=False,
                violation_type="selection_required",
                message="Please select both date and time for your consultation.",
            )
        return GuardResult(passed=True)


class SelfBookingGuard:
    def check(self, draft: BookingDraft, user: ClientProfile) -> GuardResult:
        if draft.consultant_id == user.user_id:
            return GuardResult(
                passed=False,
                violation_type="self_booking",
                message="Booking yourself is not allowed.",
            )
        return GuardResult(passed=True)


class LeadTimeGuard:
    """Rejects slots starting sooner than the configured lead time.

    ``now`` is floored to the minute, the same reading slot generation uses,
    so every slot offered from a snapshot also passes this check.
    """

    def __init__(self, lead_time_minutes: Optional[int] = None) -> None:
        minutes = settings.schedule.lead_time_minutes if lead_time_minutes is None else lead_time_minutes
        self.lead_time = timedelta(minutes=minutes)

    def check(self, selected: datetime, now: datetime) -> GuardResult:
        if selected < floor_to_minute(now) + self.lead_time:
            minutes = int(self.lead_time.total_seconds() // 60)
            logger.info("Lead time violation: %s < now + %d min", selected.isoformat(), minutes)
            return GuardResult(
                passed=False,
                violation_type="lead_time",
                message=(
                    f"Please choose a time at least {minutes} minutes from now. "
                    "This slot is no longer available."
                ),
            )
        return GuardResult(passed=True)


class SubmissionGuardPipeline:
    """Runs every guard in order and reports the first failure."""

    def __init__(self, lead_time_minutes: Optional[int] = None) -> None:
        self.auth = AuthGuard()
        self.selection = SelectionGuard()
        self.self_booking = SelfBookingGuard()
        self.lead_time = LeadTimeGuard(lead_time_minutes)

    def check(
        self, draft: BookingDraft, user: Optional[ClientProfile], now: datetime
    ) -> GuardResult:
        result = self.auth.check(user)
        if not result.passed or user is None:
            return result

        result = self.selection.check(draft)
        selected = draft.start_datetime()
        if not result.passed or selected is None:
            return result

        result = self.self_booking.check(draft, user)
        if not result.passed:
            return result
        return self.lead_time.check(selected, now)
