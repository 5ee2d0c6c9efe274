"""Tests for candidate date generation and the month grid."""

from datetime import date

from consult_booking.planner.dates import (
    build_month_grid,
    generate_candidate_dates,
    month_title,
    shift_month,
)
from tests.conftest import FRIDAY, TUESDAY, WEDNESDAY

MON_WED_FRI = frozenset({1, 3, 5})


class TestRollingWindow:
    def test_only_working_weekdays_included(self):
        dates = generate_candidate_dates(TUESDAY, MON_WED_FRI, window_days=7)
        assert [d.calendar_date for d in dates] == [WEDNESDAY, FRIDAY, date(2026, 10, 26)]

    def test_ordered_ascending(self):
        dates = generate_candidate_dates(TUESDAY, MON_WED_FRI, window_days=30)
        days = [d.calendar_date for d in dates]
        assert days == sorted(days)

    def test_window_starts_today(self):
        dates = generate_candidate_dates(TUESDAY, frozenset({2}), window_days=7)
        assert dates[0].calendar_date == TUESDAY
        assert dates[0].is_today

    def test_window_excludes_day_n(self):
        dates = generate_candidate_dates(TUESDAY, frozenset({2}), window_days=7)
        assert len(dates) == 1

    def test_default_window_is_thirty_days(self):
        dates = generate_candidate_dates(TUESDAY, frozenset())
        assert len(dates) == 30

    def test_empty_weekday_set_marks_every_day_available(self):
        dates = generate_candidate_dates(TUESDAY, frozenset(), window_days=7)
        assert len(dates) == 7
        assert all(d.is_available_weekday and d.is_selectable for d in dates)

    def test_zero_window(self):
        assert generate_candidate_dates(TUESDAY, MON_WED_FRI, window_days=0) == []

    def test_labels(self):
        first = generate_candidate_dates(TUESDAY, MON_WED_FRI, window_days=7)[0]
        assert first.day_name == "Wed"
        assert first.display_date == "Oct 21, 2026"
        assert first.iso_date == "2026-10-21"


class TestMonthGrid:
    def test_full_weeks_monday_first(self):
        cells = build_month_grid(2026, 10, TUESDAY, MON_WED_FRI)
        assert len(cells) % 7 == 0
        assert cells[0].calendar_date == date(2026, 9, 28)
        assert cells[0].calendar_date.weekday() == 0

    def test_leading_and_trailing_filler(self):
        cells = build_month_grid(2026, 10, TUESDAY, MON_WED_FRI)
        leading = [c for c in cells[:3]]
        assert all(not c.in_month for c in leading)
        assert cells[3].calendar_date == date(2026, 10, 1)
        assert cells[-1].calendar_date == date(2026, 11, 1)
        assert not cells[-1].in_month

    def test_filler_never_selectable(self):
        cells = build_month_grid(2026, 10, date(2026, 9, 1), frozenset())
        assert all(not c.is_selectable for c in cells if not c.in_month)

    def test_past_days_not_selectable(self):
        cells = build_month_grid(2026, 10, TUESDAY, frozenset())
        by_day = {c.calendar_date: c for c in cells}
        assert by_day[date(2026, 10, 19)].is_past
        assert not by_day[date(2026, 10, 19)].is_selectable
        assert by_day[TUESDAY].is_selectable

    def test_weekday_membership_applies(self):
        cells = build_month_grid(2026, 10, TUESDAY, MON_WED_FRI)
        by_day = {c.calendar_date: c for c in cells}
        assert by_day[WEDNESDAY].is_selectable
        assert not by_day[date(2026, 10, 22)].is_selectable

    def test_month_starting_on_monday_has_no_leading_filler(self):
        cells = build_month_grid(2026, 6, TUESDAY, frozenset())
        assert cells[0].calendar_date == date(2026, 6, 1)

    def test_february(self):
        cells = build_month_grid(2026, 2, date(2026, 1, 1), frozenset())
        in_month = [c for c in cells if c.in_month]
        assert len(in_month) == 28
        assert len(cells) == 35


class TestMonthNavigation:
    def test_forward_across_year(self):
        assert shift_month(2026, 12, 1) == (2027, 1)

    def test_backward_across_year(self):
        assert shift_month(2026, 1, -1) == (2025, 12)

    def test_title(self):
        assert month_title(2026, 10) == "October 2026"
