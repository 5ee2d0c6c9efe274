"""
Booking submission.

Runs the pre-submission guards, freezes the draft, sends it once to the
booking-creation endpoint and turns the response into a BookingOutcome the
screen can show directly. There is no automatic retry; backend errors are
passed through verbatim.
"""

from datetime import datetime, timezone
from typing import Optional

from consult_booking.logging_context import get_session_logger
from consult_booking.planner.draft import BookingDraft
from consult_booking.planner.planner import AvailabilityPlanner, PlannerSnapshot
from consult_booking.planner.pricing import SessionDuration
from consult_booking.schemas.booking_schema import (
    BookingOutcome,
    BookingResult,
    BookingStatus,
    BookingSubmission,
)
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.services.api_client import ApiClient

logger = get_session_logger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again to continue."
GENERIC_FAILURE_MESSAGE = "Failed to create booking. Please try again."
ALREADY_SUBMITTED_MESSAGE = "This booking has already been submitted."


def to_utc_iso(value: datetime) -> str:
    """ISO-8601 UTC timestamp with a trailing Z, as the backend stores it."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_submission(draft: BookingDraft, user: ClientProfile) -> BookingSubmission:
    start = draft.start_datetime()
    if start is None:
        raise ValueError("Cannot build a submission without a date and time")
    return BookingSubmission(
        consultant_id=draft.consultant_id,
        user_id=user.user_id,
        datetime=to_utc_iso(start),
        duration=int(draft.duration),
        consultation_detail=draft.consultation_detail,
    )


def _confirmation_message(draft: BookingDraft, result: BookingResult) -> str:
    if draft.duration is SessionDuration.FREE_TRIAL:
        return "Your free trial consultation has been scheduled."
    return result.message or "Your consultation has been scheduled successfully."


async def submit_booking(
    client: ApiClient,
    planner: AvailabilityPlanner,
    draft: BookingDraft,
    user: Optional[ClientProfile],
    snapshot: Optional[PlannerSnapshot] = None,
) -> BookingOutcome:
    """Validate and submit ``draft``. Never raises for backend failures.

    The draft stays frozen while the request is in flight and afterwards when
    the booking was created; a failed attempt reopens it for a new selection.
    """
    if draft.frozen:
        logger.warning("Ignoring repeat submission for consultant %s", draft.consultant_id)
        return BookingOutcome(
            status=BookingStatus.REJECTED,
            message=ALREADY_SUBMITTED_MESSAGE,
            violation_type="already_submitted",
        )

    snapshot = snapshot or planner.snapshot()
    check = planner.check_submission(draft, user, snapshot)
    if not check.passed or user is None:
        status = BookingStatus.NEEDS_LOGIN if check.severity == "login" else BookingStatus.REJECTED
        return BookingOutcome(
            status=status,
            message=check.message or "",
            violation_type=check.violation_type,
        )

    submission = build_submission(draft, user)
    draft.freeze()
    logger.info(
        "Submitting booking for consultant %s at %s (%d min)",
        submission.consultant_id, submission.datetime, submission.duration,
    )
    response = await client.create_booking(submission)

    if not response.success:
        draft.unfreeze()
        if response.needs_login:
            logger.warning("Booking submission rejected: session expired")
            return BookingOutcome(
                status=BookingStatus.NEEDS_LOGIN,
                message=SESSION_EXPIRED_MESSAGE,
                submission=submission,
            )
        logger.error("Booking submission failed: %s", response.error)
        return BookingOutcome(
            status=BookingStatus.FAILED,
            message=response.error or GENERIC_FAILURE_MESSAGE,
            submission=submission,
        )

    payload = response.data if isinstance(response.data, dict) else {}
    if isinstance(payload.get("data"), dict):
        payload = payload["data"]
    result = BookingResult.from_api(payload)
    if result.payment_required:
        logger.info("Booking %s awaiting payment", result.booking_id)
        return BookingOutcome(
            status=BookingStatus.PAYMENT_REQUIRED,
            message="Please complete the payment to confirm your booking.",
            result=result,
            submission=submission,
        )

    logger.info("Booking %s confirmed", result.booking_id)
    return BookingOutcome(
        status=BookingStatus.CONFIRMED,
        message=_confirmation_message(draft, result),
        result=result,
        submission=submission,
    )
