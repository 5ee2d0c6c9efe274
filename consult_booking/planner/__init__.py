from consult_booking.planner.dates import CandidateDate, build_month_grid, generate_candidate_dates
from consult_booking.planner.draft import BookingDraft
from consult_booking.planner.flow import BookingFlow, BookingStep, FlowTrigger
from consult_booking.planner.guards import GuardResult, SubmissionGuardPipeline
from consult_booking.planner.planner import AvailabilityPlanner, PlannerSnapshot
from consult_booking.planner.pricing import SessionDuration, SessionType, resolve_fee
from consult_booking.planner.slots import TimeSlot, filter_booked_slots, generate_time_slots
from consult_booking.planner.weekdays import normalize_weekdays

__all__ = [
    "AvailabilityPlanner",
    "PlannerSnapshot",
    "CandidateDate",
    "TimeSlot",
    "BookingDraft",
    "BookingFlow",
    "BookingStep",
    "FlowTrigger",
    "GuardResult",
    "SubmissionGuardPipeline",
    "SessionDuration",
    "SessionType",
    "normalize_weekdays",
    "generate_candidate_dates",
    "build_month_grid",
    "generate_time_slots",
    "filter_booked_slots",
    "resolve_fee",
]
