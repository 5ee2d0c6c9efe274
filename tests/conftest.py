"""Shared test fixtures and helpers."""

import json
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

import httpx
import pytest

from consult_booking.planner.planner import AvailabilityPlanner, PlannerSnapshot
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.schemas.consultant_schema import ConsultantAvailability
from consult_booking.services.api_client import ApiClient

# Tuesday
TUESDAY = date(2026, 10, 20)
WEDNESDAY = date(2026, 10, 21)
THURSDAY = date(2026, 10, 22)
FRIDAY = date(2026, 10, 23)


def make_availability(
    days: Optional[list[Any]] = None,
    hours: Any = "6",
    fee: Any = 500,
    consultant_id: str = "expert-1",
) -> ConsultantAvailability:
    return ConsultantAvailability(
        consultant_id=consultant_id,
        full_name="Asha Verma",
        weekly_days=["Monday", "Wednesday", "Friday"] if days is None else days,
        available_hours_per_day=hours,
        session_fee_base=fee,
    )


def make_snapshot(hour: int = 10, minute: int = 0, day: date = TUESDAY) -> PlannerSnapshot:
    return PlannerSnapshot(now=datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc))


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> ApiClient:
    return ApiClient(
        base_url="https://api.test/api/v1",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def json_body(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


@pytest.fixture
def availability():
    return make_availability()


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def planner(availability, snapshot):
    return AvailabilityPlanner(availability, clock=lambda: snapshot.now)


@pytest.fixture
def client_profile():
    return ClientProfile(user_id="client-7", full_name="Rohan")
