"""Tests for the pre-submission guard pipeline."""

from datetime import datetime, timedelta, timezone

from consult_booking.planner.draft import BookingDraft
from consult_booking.planner.guards import (
    AuthGuard,
    LeadTimeGuard,
    SelectionGuard,
    SelfBookingGuard,
    SubmissionGuardPipeline,
)
from consult_booking.planner.slots import TimeSlot
from consult_booking.schemas.client_schema import ClientProfile
from tests.conftest import TUESDAY

NOW = datetime(2026, 10, 20, 14, 0, tzinfo=timezone.utc)


def _slot_at(start: datetime) -> TimeSlot:
    return TimeSlot(
        slot_id=start.strftime("%H:%M"),
        display_label=start.strftime("%H:%M"),
        start_datetime=start,
    )


def _draft_at(start: datetime, consultant_id: str = "expert-1") -> BookingDraft:
    draft = BookingDraft(consultant_id)
    draft.select_date(start.date())
    draft.select_slot(_slot_at(start))
    return draft


class TestLeadTimeGuard:
    def test_twenty_minutes_ahead_rejected(self):
        result = LeadTimeGuard().check(NOW + timedelta(minutes=20), NOW)
        assert not result.passed
        assert result.violation_type == "lead_time"
        assert "30 minutes" in result.message

    def test_thirty_one_minutes_ahead_accepted(self):
        assert LeadTimeGuard().check(NOW + timedelta(minutes=31), NOW).passed

    def test_exactly_lead_time_accepted(self):
        assert LeadTimeGuard().check(NOW + timedelta(minutes=30), NOW).passed

    def test_seconds_on_the_clock_are_ignored(self):
        now = NOW.replace(second=45)
        assert LeadTimeGuard().check(NOW + timedelta(minutes=30), now).passed

    def test_custom_lead_time(self):
        guard = LeadTimeGuard(lead_time_minutes=60)
        assert not guard.check(NOW + timedelta(minutes=45), NOW).passed


class TestAuthGuard:
    def test_anonymous(self):
        result = AuthGuard().check(None)
        assert not result.passed
        assert result.severity == "login"
        assert result.message == "Please login to book a consultation."

    def test_missing_user_id(self):
        assert not AuthGuard().check(ClientProfile(user_id="")).passed

    def test_logged_in(self):
        assert AuthGuard().check(ClientProfile(user_id="u1")).passed


class TestSelectionGuard:
    def test_nothing_selected(self):
        result = SelectionGuard().check(BookingDraft("expert-1"))
        assert not result.passed
        assert result.message == "Please select both date and time for your consultation."

    def test_date_without_time(self):
        draft = BookingDraft("expert-1")
        draft.select_date(TUESDAY)
        assert not SelectionGuard().check(draft).passed


class TestSelfBookingGuard:
    def test_same_id_rejected(self):
        draft = _draft_at(NOW + timedelta(hours=2), consultant_id="u1")
        result = SelfBookingGuard().check(draft, ClientProfile(user_id="u1"))
        assert not result.passed
        assert result.violation_type == "self_booking"

    def test_other_client_allowed(self):
        draft = _draft_at(NOW + timedelta(hours=2))
        assert SelfBookingGuard().check(draft, ClientProfile(user_id="u1")).passed


class TestSubmissionGuardPipeline:
    def test_auth_checked_first(self):
        result = SubmissionGuardPipeline().check(BookingDraft("expert-1"), None, NOW)
        assert result.violation_type == "login_required"

    def test_selection_before_self_booking(self):
        result = SubmissionGuardPipeline().check(
            BookingDraft("u1"), ClientProfile(user_id="u1"), NOW
        )
        assert result.violation_type == "selection_required"

    def test_stale_slot_rejected(self):
        draft = _draft_at(NOW + timedelta(minutes=15))
        result = SubmissionGuardPipeline().check(draft, ClientProfile(user_id="u1"), NOW)
        assert result.violation_type == "lead_time"

    def test_valid_draft_passes(self):
        draft = _draft_at(NOW + timedelta(hours=1))
        assert SubmissionGuardPipeline().check(draft, ClientProfile(user_id="u1"), NOW).passed
