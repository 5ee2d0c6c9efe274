"""Client (booking user) profile data."""

from typing import Any

from pydantic import BaseModel


class ClientProfile(BaseModel):
    """Logged-in user making the booking.

    ``video_free_trial`` and ``chat_free_trial`` are "already used" flags:
    True means the free 5-minute session of that type has been consumed.
    """
    user_id: str
    full_name: str = ""
    video_free_trial: bool = False
    chat_free_trial: bool = False

    @classmethod
    def from_api(cls, user: dict[str, Any]) -> "ClientProfile":
        return cls(
            user_id=str(user.get("_id", "")),
            full_name=user.get("fullName") or "",
            video_free_trial=bool(user.get("videoFreeTrial")),
            chat_free_trial=bool(user.get("chatFreeTrial")),
        )
