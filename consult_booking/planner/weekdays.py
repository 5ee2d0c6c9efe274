"""
Weekday normalization for consultant availability.

Consultant profiles store their working days inconsistently: full names,
abbreviations, numeric strings and ranges all show up. Every descriptor is
parsed into a small closed set of token types and then flattened into a
canonical set of weekday indexes, 0 (Sunday) through 6 (Saturday).

Usage:
    days = normalize_weekdays(["Mon-Fri", "sun."])
    assert days == {0, 1, 2, 3, 4, 5}
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional, Union

logger = logging.getLogger(__name__)

WEEKDAY_NAMES: tuple[str, ...] = (
    "sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday",
)
DAYS_IN_WEEK = 7
MIN_NAME_PREFIX = 3


@dataclass(frozen=True)
class NamedDay:
    """A weekday given by name or abbreviation."""
    index: int

    def days(self) -> frozenset[int]:
        return frozenset({self.index})


@dataclass(frozen=True)
class NumericDay:
    """A weekday given as a number; 7 is accepted as Sunday."""
    index: int

    def days(self) -> frozenset[int]:
        return frozenset({self.index})


@dataclass(frozen=True)
class DayRange:
    """An inclusive, circular range such as Mon-Fri or Sat-Mon."""
    start: int
    end: int

    def days(self) -> frozenset[int]:
        span = (self.end - self.start) % DAYS_IN_WEEK
        return frozenset((self.start + step) % DAYS_IN_WEEK for step in range(span + 1))


DayToken = Union[NamedDay, NumericDay, DayRange]


def _parse_name(text: str) -> Optional[int]:
    name = text.lower().rstrip(".").strip()
    if len(name) < MIN_NAME_PREFIX:
        return None
    for index, full in enumerate(WEEKDAY_NAMES):
        if full.startswith(name):
            return index
    return None


def _parse_number(text: str) -> Optional[int]:
    if not text.isdigit():
        return None
    value = int(text)
    if 0 <= value <= DAYS_IN_WEEK:
        return value % DAYS_IN_WEEK
    return None


def _parse_single(text: str) -> Optional[Union[NamedDay, NumericDay]]:
    text = text.strip()
    number = _parse_number(text)
    if number is not None:
        return NumericDay(number)
    name = _parse_name(text)
    if name is not None:
        return NamedDay(name)
    return None


def parse_token(raw: Any) -> Optional[DayToken]:
    """Parse one weekday descriptor. Unrecognized input returns None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return NumericDay(raw % DAYS_IN_WEEK) if 0 <= raw <= DAYS_IN_WEEK else None
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    if "-" in text:
        parts = text.split("-")
        if len(parts) != 2:
            return None
        start, end = _parse_single(parts[0]), _parse_single(parts[1])
        if start is None or end is None:
            return None
        return DayRange(start.index, end.index)
    return _parse_single(text)


def normalize_weekdays(values: Optional[Union[str, int, Iterable[Any]]]) -> frozenset[int]:
    """Flatten weekday descriptors into canonical indexes.

    A bare string is treated as a comma-separated list. Unrecognized tokens
    are skipped; an empty result means the consultant set no restriction.
    """
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = values.split(",")
    elif isinstance(values, int):
        values = [values]

    days: set[int] = set()
    for raw in values:
        token = parse_token(raw)
        if token is None:
            logger.debug("Skipping unrecognized weekday token: %r", raw)
            continue
        days |= token.days()
    return frozenset(days)


def weekday_index(day: date) -> int:
    """Weekday of ``day`` with Sunday as 0."""
    return (day.weekday() + 1) % DAYS_IN_WEEK


def is_available_weekday(index: int, days: frozenset[int]) -> bool:
    """An empty day set places no restriction on the consultant."""
    return not days or index in days


def short_day_name(index: int) -> str:
    return WEEKDAY_NAMES[index][:3].title()
