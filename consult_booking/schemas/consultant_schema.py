"""Consultant availability configuration as delivered by the profile service."""

from typing import Any

from pydantic import BaseModel, Field


class ConsultantAvailability(BaseModel):
    """Read-only availability settings owned by a consultant.

    Weekday tokens, hours and fee are stored as received; the planner's
    normalizers skip or default whatever they cannot read.
    """
    consultant_id: str
    full_name: str = ""
    weekly_days: list[Any] = Field(default_factory=list)
    available_hours_per_day: Any = None
    session_fee_base: Any = None

    @classmethod
    def from_profile(cls, expert: dict[str, Any]) -> "ConsultantAvailability":
        """Build from the backend's expert record.

        The schedule lives under ``consultantRequest.consultantProfile``;
        missing branches yield an empty configuration rather than an error.
        """
        profile = (expert.get("consultantRequest") or {}).get("consultantProfile") or {}
        days = profile.get("days") or []
        if isinstance(days, str):
            days = [part for part in days.split(",") if part.strip()]
        elif not isinstance(days, list):
            days = [days]
        return cls(
            consultant_id=str(expert.get("_id", "")),
            full_name=expert.get("fullName") or "",
            weekly_days=days,
            available_hours_per_day=profile.get("availableTimePerDay"),
            session_fee_base=profile.get("sessionFee"),
        )
