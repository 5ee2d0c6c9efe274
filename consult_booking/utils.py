"""Shared utilities used across the booking planner."""

import re
from datetime import datetime, time
from typing import Any, Optional

_FIRST_INT = re.compile(r"\d+")


def first_int(value: Any) -> Optional[int]:
    """Return the first run of digits in ``value`` as an int, or None.

    Examples:
        >>> first_int("6-8 hours")
        6
        >>> first_int(4)
        4
        >>> first_int("flexible") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    match = _FIRST_INT.search(str(value))
    return int(match.group()) if match else None


def format_12h(value: time) -> str:
    """Render a time as a 12-hour label without a leading zero.

    Examples:
        >>> format_12h(time(9, 0))
        '9:00 AM'
        >>> format_12h(time(13, 30))
        '1:30 PM'
    """
    suffix = "AM" if value.hour < 12 else "PM"
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {suffix}"


def format_hhmm(value: time) -> str:
    """Render a time as a zero-padded 24-hour ``HH:MM`` id."""
    return f"{value.hour:02d}:{value.minute:02d}"


def floor_to_minute(value: datetime) -> datetime:
    """Drop seconds and microseconds so clock readings compare on the slot grid."""
    return value.replace(second=0, microsecond=0)
