"""
Candidate date generation for the booking calendar.

Two views are produced from the same weekday rules: a rolling list of the
next N bookable dates, and a Monday-first month grid padded with filler days
from the neighbouring months so that every week row is complete.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, computed_field

from consult_booking.config import settings
from consult_booking.planner.weekdays import (
    is_available_weekday,
    short_day_name,
    weekday_index,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = tuple(calendar.month_name)
GRID_WEEKDAY_HEADERS = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")


class CandidateDate(BaseModel):
    """A calendar date offered for selection. Never persisted."""
    calendar_date: date
    is_past: bool
    is_available_weekday: bool
    is_today: bool = False
    in_month: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_selectable(self) -> bool:
        return self.in_month and not self.is_past and self.is_available_weekday

    @property
    def day_name(self) -> str:
        return short_day_name(weekday_index(self.calendar_date))

    @property
    def display_date(self) -> str:
        d = self.calendar_date
        return f"{calendar.month_abbr[d.month]} {d.day}, {d.year}"

    @property
    def iso_date(self) -> str:
        return self.calendar_date.isoformat()


def _candidate(day: date, today: date, weekdays: frozenset[int], in_month: bool = True) -> CandidateDate:
    return CandidateDate(
        calendar_date=day,
        is_past=day < today,
        is_available_weekday=is_available_weekday(weekday_index(day), weekdays),
        is_today=day == today,
        in_month=in_month,
    )


def generate_candidate_dates(
    today: date,
    weekdays: frozenset[int],
    window_days: Optional[int] = None,
) -> list[CandidateDate]:
    """Dates in ``[today, today + window_days)`` on which the consultant works."""
    window = settings.schedule.date_window_days if window_days is None else window_days
    dates = []
    for offset in range(max(window, 0)):
        candidate = _candidate(today + timedelta(days=offset), today, weekdays)
        if candidate.is_available_weekday:
            dates.append(candidate)
    logger.debug("Generated %d candidate dates over %d days", len(dates), window)
    return dates


def build_month_grid(
    year: int, month: int, today: date, weekdays: frozenset[int]
) -> list[CandidateDate]:
    """Full weeks covering ``year``/``month``, Monday first.

    Filler days from the adjacent months are included for layout only and
    are never selectable.
    """
    first = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]

    cells: list[CandidateDate] = []
    for back in range(first.weekday(), 0, -1):
        cells.append(_candidate(first - timedelta(days=back), today, weekdays, in_month=False))
    for day in range(days_in_month):
        cells.append(_candidate(first + timedelta(days=day), today, weekdays))

    last = date(year, month, days_in_month)
    trailing = (-len(cells)) % 7
    for forward in range(1, trailing + 1):
        cells.append(_candidate(last + timedelta(days=forward), today, weekdays, in_month=False))
    return cells


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month]} {year}"
