"""
Offline console demo that walks the guided booking flow without a backend.

Uses the real planner, step machine, guards, slot loader and submission
service against an in-memory backend served through httpx.MockTransport.
No network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario free_trial
    python console_demo.py --scenario too_late
"""

import argparse
import asyncio
import json
import uuid
from datetime import timedelta
from typing import Optional

import httpx

from consult_booking.config import settings
from consult_booking.logging_context import new_session_id, set_session_id
from consult_booking.planner import AvailabilityPlanner, BookingFlow, FlowTrigger, PlannerSnapshot
from consult_booking.planner.pricing import SessionDuration
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.schemas.consultant_schema import ConsultantAvailability
from consult_booking.services.api_client import ApiClient
from consult_booking.services.availability import SlotLoader
from consult_booking.services.booking import submit_booking

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_EXPERT = {
    "_id": "expert-42",
    "fullName": "Asha Verma",
    "consultantRequest": {
        "consultantProfile": {
            "days": ["Mon-Fri"],
            "availableTimePerDay": "6-8 hours",
            "sessionFee": 500,
        }
    },
}


class DemoBackend:
    """In-memory stand-in for the booking endpoints."""

    def __init__(self) -> None:
        self.booked: dict[str, list[str]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if "/booking/bookedslots/" in path:
            day = request.url.params.get("date", "")
            return httpx.Response(200, json=[{"time": t} for t in self.booked.get(day, [])])
        if path.endswith("/booking/createbooking"):
            body = json.loads(request.content)
            booking_id = f"BK-{uuid.uuid4().hex[:6].upper()}"
            if body["duration"] == SessionDuration.FREE_TRIAL:
                return httpx.Response(201, json={"bookingId": booking_id, "message": "free trial booked"})
            order = {"id": f"order_{uuid.uuid4().hex[:10]}", "currency": settings.pricing.currency}
            return httpx.Response(201, json={"bookingId": booking_id, "razorpayOrder": order})
        return httpx.Response(404, json={"message": "Not found"})


class ConsoleSession:
    """Plays a booking scenario end to end in the terminal."""

    SCENARIOS = ("paid", "free_trial", "too_late")

    def __init__(self) -> None:
        self.backend = DemoBackend()
        self.availability = ConsultantAvailability.from_profile(DEMO_EXPERT)
        self.planner = AvailabilityPlanner(self.availability)
        self.flow = BookingFlow()
        self.user = ClientProfile(user_id="client-7", full_name="Rohan")

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    async def run_scenario(self, scenario: str) -> None:
        set_session_id(new_session_id())
        first_date = self.planner.candidate_dates(self.planner.snapshot())[0].calendar_date
        self.backend.booked[first_date.isoformat()] = ["09:30", "10:00"]

        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.app_name} - Scenario: {scenario}{RESET}")
        print(f"{BOLD}  Expert: {self.availability.full_name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        self.say("How it works: pick a length, pick a slot, pay, and meet online.")
        self.flow.transition(FlowTrigger.NEXT)
        self.system_log(f"Step: {self.flow.current_step.value}")

        draft = self.planner.new_draft(self.user)
        for option in self.planner.fee_options(self.user):
            self.say(f"  {option['label']}: {settings.pricing.currency} {option['fee']}")
        duration = SessionDuration.FREE_TRIAL if scenario == "free_trial" else SessionDuration.LONG
        _, msg = draft.set_duration(duration)
        self.system_log(msg)
        self.flow.transition(FlowTrigger.NEXT)
        self.system_log(f"Step: {self.flow.current_step.value}")

        snapshot = self.planner.snapshot()
        dates = self.planner.candidate_dates(snapshot)
        self.say("Next dates: " + ", ".join(f"{d.day_name} {d.display_date}" for d in dates[:5]))
        candidate = dates[0]
        self.system_log(draft.select_date(candidate)[1])

        async with ApiClient(transport=httpx.MockTransport(self.backend.handler)) as client:
            loader = SlotLoader(self.planner, client)
            slots = await loader.load(candidate.calendar_date, snapshot) or []
            if not slots:
                self.say(f"{YELLOW}No slots left on {candidate.display_date}.{RESET}")
                return
            self.say("Slots: " + ", ".join(s.display_label for s in slots))
            self.system_log(draft.select_slot(slots[0])[1])
            draft.set_notes("Reviewing a pitch deck")

            if scenario == "too_late":
                start = draft.start_datetime()
                snapshot = PlannerSnapshot(now=start - timedelta(minutes=10))
                self.system_log("Clock advanced to 10 minutes before the slot")

            outcome = await submit_booking(client, self.planner, draft, self.user, snapshot)

        colour = GREEN if outcome.success else RED
        print(f"{colour}{outcome.status.value}: {outcome.message}{RESET}")
        if outcome.success:
            self.flow.transition(FlowTrigger.BOOKING_CREATED)
            fee = self.planner.fee_for(draft.duration)
            self.system_log(f"Fee: {settings.pricing.currency} {fee}")
        self.system_log(f"Step trace: {' -> '.join(self.flow.get_step_trace())}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Offline booking console demo")
    parser.add_argument(
        "--scenario",
        choices=ConsoleSession.SCENARIOS,
        default="paid",
        help="Scripted scenario to play",
    )
    args = parser.parse_args(argv)
    asyncio.run(ConsoleSession().run_scenario(args.scenario))


if __name__ == "__main__":
    main()
