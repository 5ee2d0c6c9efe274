"""Consultant profile lookups feeding the planner."""

import asyncio
import logging
from typing import Any, Optional

from consult_booking.config import settings
from consult_booking.schemas.consultant_schema import ConsultantAvailability
from consult_booking.services.api_client import TIMEOUT_MESSAGE, ApiClient, ApiResult

logger = logging.getLogger(__name__)


def _unwrap(data: Any) -> Any:
    if isinstance(data, dict) and "data" in data:
        return data["data"]
    return data


async def get_consultant_availability(
    client: ApiClient, consultant_id: str
) -> Optional[ConsultantAvailability]:
    """Availability for one consultant, or None when the profile can't be loaded."""
    result = await client.get_consultant(consultant_id)
    if not result.success:
        logger.error("Could not load consultant %s: %s", consultant_id, result.error)
        return None
    expert = _unwrap(result.data)
    if not isinstance(expert, dict):
        logger.error("Unexpected consultant payload for %s", consultant_id)
        return None
    return ConsultantAvailability.from_profile(expert)


async def list_active_consultants(
    client: ApiClient, timeout: Optional[float] = None
) -> tuple[list[ConsultantAvailability], Optional[str]]:
    """Active consultants and an error message when the directory is unreachable.

    The directory call is raced against ``timeout`` seconds.
    """
    if timeout is None:
        timeout = settings.api.directory_timeout_sec
    try:
        result: ApiResult = await asyncio.wait_for(client.get_active_consultants(), timeout)
    except asyncio.TimeoutError:
        logger.warning("Consultant directory timed out after %.1fs", timeout)
        return [], TIMEOUT_MESSAGE

    if not result.success:
        return [], result.error

    experts = _unwrap(result.data)
    if not isinstance(experts, list):
        return [], None
    return [ConsultantAvailability.from_profile(e) for e in experts if isinstance(e, dict)], None
