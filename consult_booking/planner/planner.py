"""
Availability & slot planner facade.

Both booking entry points (the quick booking sheet on an expert's profile
and the guided booking flow) go through this one class, so date rules, slot
rules and pricing cannot drift apart.

The clock is read once per interaction into a PlannerSnapshot and that same
instant is passed to date generation, slot generation and the submission
guard.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from consult_booking.config import settings
from consult_booking.planner.dates import (
    CandidateDate,
    build_month_grid,
    generate_candidate_dates,
)
from consult_booking.planner.draft import BookingDraft
from consult_booking.planner.guards import GuardResult, SubmissionGuardPipeline
from consult_booking.planner.pricing import (
    FeeOption,
    SessionType,
    fee_options,
    resolve_fee,
    resolve_session_fee,
)
from consult_booking.planner.slots import (
    TimeSlot,
    filter_booked_slots,
    generate_time_slots,
    resolve_hours_per_day,
)
from consult_booking.planner.weekdays import normalize_weekdays
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.schemas.consultant_schema import ConsultantAvailability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerSnapshot:
    """A single reading of the wall clock."""
    now: datetime

    @property
    def today(self) -> date:
        return self.now.date()


def local_now() -> datetime:
    return datetime.now().astimezone()


class AvailabilityPlanner:
    """Dates, slots, fees and submission checks for one consultant."""

    def __init__(
        self,
        availability: ConsultantAvailability,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.availability = availability
        self.weekdays = normalize_weekdays(availability.weekly_days)
        self.hours_per_day = resolve_hours_per_day(availability.available_hours_per_day)
        self.base_fee = resolve_session_fee(availability.session_fee_base)
        self._clock = clock or local_now
        self._guards = SubmissionGuardPipeline()
        if not self.weekdays:
            logger.info(
                "Consultant %s has no recognizable weekdays; treating every day as available",
                availability.consultant_id,
            )

    @property
    def consultant_id(self) -> str:
        return self.availability.consultant_id

    def snapshot(self) -> PlannerSnapshot:
        return PlannerSnapshot(now=self._clock())

    def candidate_dates(
        self, snapshot: PlannerSnapshot, window_days: Optional[int] = None
    ) -> list[CandidateDate]:
        return generate_candidate_dates(snapshot.today, self.weekdays, window_days)

    def month_grid(self, year: int, month: int, snapshot: PlannerSnapshot) -> list[CandidateDate]:
        return build_month_grid(year, month, snapshot.today, self.weekdays)

    def slots_for(
        self,
        selected_date: date,
        snapshot: PlannerSnapshot,
        booked: Iterable[str] = (),
    ) -> list[TimeSlot]:
        """Grid slots for ``selected_date`` minus the booked markers."""
        slots = generate_time_slots(
            selected_date, self.hours_per_day, snapshot.now, settings.schedule
        )
        return filter_booked_slots(slots, booked)

    def fee_for(self, duration: int) -> int:
        return resolve_fee(self.base_fee, duration)

    def fee_options(
        self, profile: Optional[ClientProfile], session_type: SessionType = SessionType.VIDEO
    ) -> list[FeeOption]:
        return fee_options(self.base_fee, profile, session_type)

    def new_draft(
        self, profile: Optional[ClientProfile], session_type: SessionType = SessionType.VIDEO
    ) -> BookingDraft:
        return BookingDraft(self.consultant_id, profile, session_type)

    def check_submission(
        self, draft: BookingDraft, user: Optional[ClientProfile], snapshot: PlannerSnapshot
    ) -> GuardResult:
        return self._guards.check(draft, user, snapshot.now)
