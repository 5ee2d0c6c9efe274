"""Booking submission payloads and results."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookingSubmission(BaseModel):
    """Wire payload for the booking-creation endpoint."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    consultant_id: str = Field(alias="consultantId")
    user_id: str = Field(alias="userId")
    datetime: str
    duration: int
    consultation_detail: str = Field(alias="consultationDetail")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PaymentOrder(BaseModel):
    """Gateway order returned when a booking still needs payment."""
    model_config = ConfigDict(extra="allow")

    id: str
    amount: Optional[float] = None
    currency: Optional[str] = None


class BookingResult(BaseModel):
    """Parsed response of the booking-creation endpoint."""
    booking_id: Optional[str] = None
    payment_order: Optional[PaymentOrder] = None
    message: str = ""

    @property
    def payment_required(self) -> bool:
        return self.payment_order is not None

    @classmethod
    def from_api(cls, data: Optional[dict[str, Any]]) -> "BookingResult":
        data = data or {}
        order = data.get("razorpayOrder")
        return cls(
            booking_id=data.get("bookingId"),
            payment_order=PaymentOrder(**order) if isinstance(order, dict) and order.get("id") else None,
            message=data.get("message") or "",
        )


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PAYMENT_REQUIRED = "payment_required"
    REJECTED = "rejected"
    NEEDS_LOGIN = "needs_login"
    FAILED = "failed"


class BookingOutcome(BaseModel):
    """What the client should show after a submission attempt."""
    status: BookingStatus
    message: str
    result: Optional[BookingResult] = None
    submission: Optional[BookingSubmission] = None
    violation_type: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status in (BookingStatus.CONFIRMED, BookingStatus.PAYMENT_REQUIRED)
