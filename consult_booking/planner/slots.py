"""
Time slot generation and booked-slot exclusion.

Slots sit on a fixed grid that starts at the business-day lower bound and
runs for the consultant's configured hours, capped at the business-day end.
On the current day nothing earlier than now plus the lead time is offered.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from consult_booking.config import ScheduleConfig, settings
from consult_booking.utils import first_int, floor_to_minute, format_12h, format_hhmm

logger = logging.getLogger(__name__)

BOOKED_LIST_KEYS = ("bookedSlots", "slots", "data")


class TimeSlot(BaseModel):
    """A bookable grid slot within one date."""
    model_config = ConfigDict(frozen=True)

    slot_id: str
    display_label: str
    start_datetime: datetime


def resolve_hours_per_day(value: Any, default: Optional[int] = None) -> int:
    """Hours the consultant works per day, from free text such as "6-8 hours"."""
    hours = first_int(value)
    if hours is None:
        fallback = settings.schedule.default_hours_per_day if default is None else default
        logger.debug("Unparseable hours per day %r, using %d", value, fallback)
        return fallback
    return hours


def _earliest_start(selected_date: date, now: datetime, schedule: ScheduleConfig) -> datetime:
    floor = datetime.combine(selected_date, time(), tzinfo=now.tzinfo) + timedelta(
        minutes=schedule.day_start_minutes
    )
    if selected_date != now.date():
        return floor
    return floor_to_minute(now) + timedelta(minutes=schedule.lead_time_minutes)


def generate_time_slots(
    selected_date: date,
    hours_per_day: Any,
    now: datetime,
    schedule: Optional[ScheduleConfig] = None,
) -> list[TimeSlot]:
    """Ordered slots for ``selected_date``; empty when nothing is bookable."""
    schedule = schedule or settings.schedule
    hours = resolve_hours_per_day(hours_per_day, schedule.default_hours_per_day)
    lower = schedule.day_start_minutes
    upper = min(schedule.day_end_minutes, lower + hours * 60)
    if hours <= 0 or upper <= lower or selected_date < now.date():
        return []

    earliest = _earliest_start(selected_date, now, schedule)
    midnight = datetime.combine(selected_date, time(), tzinfo=now.tzinfo)

    slots = []
    for minute in range(lower, upper, schedule.slot_minutes):
        start = midnight + timedelta(minutes=minute)
        if start < earliest:
            continue
        clock = start.time()
        slots.append(
            TimeSlot(
                slot_id=format_hhmm(clock),
                display_label=format_12h(clock),
                start_datetime=start,
            )
        )
    logger.debug("Generated %d slots for %s", len(slots), selected_date.isoformat())
    return slots


def filter_booked_slots(slots: list[TimeSlot], booked: Iterable[str]) -> list[TimeSlot]:
    """Drop slots whose id exactly matches a booked marker, keeping order."""
    taken = set(booked)
    return [slot for slot in slots if slot.slot_id not in taken]


def parse_booked_markers(payload: Any) -> frozenset[str]:
    """Extract ``HH:MM`` markers from a booked-slots response body.

    Accepts a bare list or a dict wrapping one. Items may be strings or
    objects carrying a ``time`` key. Anything else is skipped.
    """
    if isinstance(payload, dict):
        for key in BOOKED_LIST_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
        else:
            return frozenset()
    if not isinstance(payload, list):
        return frozenset()

    markers = set()
    for item in payload:
        if isinstance(item, str):
            markers.add(item)
        elif isinstance(item, dict) and isinstance(item.get("time"), str):
            markers.add(item["time"])
    return frozenset(markers)
