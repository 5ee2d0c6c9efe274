"""
Thin async client for the consultation backend.

Every call resolves to an ApiResult envelope instead of raising, so screens
can decide per call whether a failure blocks the user or is absorbed.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import httpx

from consult_booking.config import settings
from consult_booking.schemas.booking_schema import BookingSubmission

logger = logging.getLogger(__name__)

BOOKED_SLOTS_ENDPOINT = "/booking/bookedslots"
CREATE_BOOKING_ENDPOINT = "/booking/createbooking"
CONSULTANT_ENDPOINT = "/global/consultant"
ACTIVE_CONSULTANTS_ENDPOINT = "/global/globalseeallactiveconsultants"

TIMEOUT_MESSAGE = "Request timeout. Please check your internet connection."
NETWORK_ERROR_MESSAGE = "Network error occurred. Please try again."


@dataclass
class ApiResult:
    """Envelope for one backend call."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    needs_login: bool = False


class ApiClient:
    """Backend REST client sharing one httpx connection pool."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api.base_url,
            timeout=timeout or settings.api.request_timeout_sec,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        kwargs: dict[str, Any] = {"headers": self._headers(), "json": json, "params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException:
            logger.warning("API call timed out for %s", endpoint)
            return ApiResult(success=False, error=TIMEOUT_MESSAGE)
        except httpx.HTTPError as exc:
            logger.error("API call failed for %s: %s", endpoint, exc)
            return ApiResult(success=False, error=NETWORK_ERROR_MESSAGE)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = body.get("message") if isinstance(body, dict) else None
            error = message or f"HTTP error! status: {response.status_code}"
            logger.error("API call failed for %s: %s", endpoint, error)
            return ApiResult(
                success=False,
                error=error,
                status_code=response.status_code,
                needs_login=response.status_code == 401,
            )
        return ApiResult(success=True, data=body, status_code=response.status_code)

    async def get_booked_slots(
        self, consultant_id: str, day: date, timeout: Optional[float] = None
    ) -> ApiResult:
        return await self.request(
            "GET",
            f"{BOOKED_SLOTS_ENDPOINT}/{consultant_id}",
            params={"date": day.isoformat()},
            timeout=timeout,
        )

    async def create_booking(self, submission: BookingSubmission) -> ApiResult:
        return await self.request("POST", CREATE_BOOKING_ENDPOINT, json=submission.to_payload())

    async def get_consultant(self, consultant_id: str) -> ApiResult:
        return await self.request("GET", f"{CONSULTANT_ENDPOINT}/{consultant_id}")

    async def get_active_consultants(self) -> ApiResult:
        return await self.request(
            "GET", ACTIVE_CONSULTANTS_ENDPOINT, timeout=settings.api.directory_timeout_sec
        )
