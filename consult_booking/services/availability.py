"""
Booked-slot lookup and per-date slot loading.

Booked markers only pre-filter what the client is shown; the backend decides
conflicts when the booking is created. A lookup that fails or times out is
therefore treated as "nothing booked" rather than blocking the calendar.

When the client taps a new date while the previous lookup is still in
flight, the previous lookup is cancelled and any late result for it is
discarded, so an old response never overwrites the newer selection.
"""

import asyncio
from datetime import date
from typing import Optional

from consult_booking.config import settings
from consult_booking.logging_context import get_session_logger
from consult_booking.planner.planner import AvailabilityPlanner, PlannerSnapshot
from consult_booking.planner.slots import TimeSlot, parse_booked_markers
from consult_booking.services.api_client import ApiClient

logger = get_session_logger(__name__)


async def fetch_booked_markers(
    client: ApiClient,
    consultant_id: str,
    day: date,
    timeout: Optional[float] = None,
) -> frozenset[str]:
    """Booked ``HH:MM`` markers for one consultant and date; empty on failure."""
    if timeout is None:
        timeout = settings.api.booked_slots_timeout_sec
    try:
        result = await asyncio.wait_for(
            client.get_booked_slots(consultant_id, day, timeout=timeout), timeout
        )
    except asyncio.TimeoutError:
        logger.warning(
            "Booked slots lookup timed out after %.1fs for %s on %s; showing all slots",
            timeout, consultant_id, day.isoformat(),
        )
        return frozenset()

    if not result.success:
        logger.warning(
            "Booked slots lookup failed for %s on %s: %s; showing all slots",
            consultant_id, day.isoformat(), result.error,
        )
        return frozenset()
    return parse_booked_markers(result.data)


class SlotLoader:
    """Loads the slot list for whichever date the client selected last."""

    def __init__(
        self,
        planner: AvailabilityPlanner,
        client: ApiClient,
        timeout: Optional[float] = None,
    ) -> None:
        self.planner = planner
        self.client = client
        self.timeout = timeout
        self.selected_date: Optional[date] = None
        self.slots: list[TimeSlot] = []
        self.booked: frozenset[str] = frozenset()
        self.loading = False
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    async def load(self, day: date, snapshot: PlannerSnapshot) -> Optional[list[TimeSlot]]:
        """Fetch booked markers for ``day`` and publish the filtered slots.

        Returns None when a later call superseded this one; the published
        state then belongs to the later call.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()

        self._generation += 1
        generation = self._generation
        self.selected_date = day
        self.slots = []
        self.loading = True

        task = asyncio.ensure_future(
            fetch_booked_markers(self.client, self.planner.consultant_id, day, self.timeout)
        )
        self._task = task
        try:
            booked = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Slot load for %s superseded", day.isoformat())
                return None
            self.loading = False
            raise

        if generation != self._generation:
            logger.debug("Discarding late slot load for %s", day.isoformat())
            return None

        self.booked = booked
        self.slots = self.planner.slots_for(day, snapshot, booked)
        self.loading = False
        logger.info(
            "Loaded %d slots for %s (%d booked)", len(self.slots), day.isoformat(), len(booked)
        )
        return self.slots

    def reset(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._generation += 1
        self._task = None
        self.selected_date = None
        self.slots = []
        self.booked = frozenset()
        self.loading = False
