"""Session durations, fees and free-trial eligibility."""

import logging
from enum import Enum, IntEnum
from typing import Any, Optional, TypedDict

from consult_booking.config import settings
from consult_booking.schemas.client_schema import ClientProfile
from consult_booking.utils import first_int

logger = logging.getLogger(__name__)


class SessionDuration(IntEnum):
    FREE_TRIAL = 5
    SHORT = 30
    LONG = 60


class SessionType(str, Enum):
    VIDEO = "video"
    CHAT = "chat"


class FeeOption(TypedDict):
    """One selectable duration with its price."""

    duration: int
    fee: int
    label: str
    free_trial: bool


def resolve_session_fee(raw: Any) -> int:
    """Consultant's 30-minute fee, or the configured default when unset."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        fee = int(raw)
    else:
        fee = first_int(str(raw).replace(",", "")) if raw is not None else None
    if not fee or fee < 0:
        return settings.pricing.default_session_fee
    return fee


def resolve_fee(base: int, duration: int, multiplier: Optional[float] = None) -> int:
    """Price of a session of ``duration`` minutes given the 30-minute base."""
    multiplier = settings.pricing.long_session_multiplier if multiplier is None else multiplier
    try:
        duration = SessionDuration(int(duration))
    except ValueError:
        raise ValueError(f"Unsupported session duration: {duration!r}") from None

    if duration is SessionDuration.FREE_TRIAL:
        return 0
    if duration is SessionDuration.SHORT:
        return base
    return round(base * multiplier)


def is_free_trial_eligible(
    profile: Optional[ClientProfile], session_type: SessionType = SessionType.VIDEO
) -> bool:
    """The free trial is offered once per session type."""
    if profile is None:
        return False
    session_type = SessionType(session_type)
    if session_type is SessionType.VIDEO:
        return not profile.video_free_trial
    return not profile.chat_free_trial


def available_durations(
    profile: Optional[ClientProfile], session_type: SessionType = SessionType.VIDEO
) -> list[SessionDuration]:
    durations = [SessionDuration.SHORT, SessionDuration.LONG]
    if is_free_trial_eligible(profile, session_type):
        durations.insert(0, SessionDuration.FREE_TRIAL)
    return durations


def fee_options(
    base: int,
    profile: Optional[ClientProfile] = None,
    session_type: SessionType = SessionType.VIDEO,
) -> list[FeeOption]:
    """Priced duration choices for display."""
    options: list[FeeOption] = []
    for duration in available_durations(profile, session_type):
        free = duration is SessionDuration.FREE_TRIAL
        label = f"{int(duration)} minutes" + (" (Free Trial)" if free else "")
        options.append(
            {
                "duration": int(duration),
                "fee": resolve_fee(base, duration),
                "label": label,
                "free_trial": free,
            }
        )
    return options
