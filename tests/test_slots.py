"""Tests for slot generation, hours parsing and booked-slot filtering."""

from datetime import datetime, timedelta, timezone

import pytest

from consult_booking.planner.slots import (
    TimeSlot,
    filter_booked_slots,
    generate_time_slots,
    parse_booked_markers,
    resolve_hours_per_day,
)
from tests.conftest import TUESDAY, WEDNESDAY


def _ids(slots):
    return [s.slot_id for s in slots]


def _slot(slot_id: str) -> TimeSlot:
    hour, minute = map(int, slot_id.split(":"))
    return TimeSlot(
        slot_id=slot_id,
        display_label=slot_id,
        start_datetime=datetime(2026, 10, 21, hour, minute),
    )


NOW = datetime(2026, 10, 20, 10, 0)


class TestResolveHoursPerDay:
    @pytest.mark.parametrize(
        "raw,expected",
        [("8", 8), (6, 6), ("6-8 hours", 6), ("about 4h", 4), ("0", 0)],
    )
    def test_first_integer(self, raw, expected):
        assert resolve_hours_per_day(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "flexible", True])
    def test_default_when_unparseable(self, raw):
        assert resolve_hours_per_day(raw) == 8


class TestGridBounds:
    def test_eight_hours_future_date(self):
        slots = generate_time_slots(WEDNESDAY, "8", NOW)
        assert slots[0].slot_id == "09:00"
        assert slots[-1].slot_id == "16:30"
        assert len(slots) == 16
        assert "17:00" not in _ids(slots)

    def test_thirty_minute_steps(self):
        slots = generate_time_slots(WEDNESDAY, "3", NOW)
        assert _ids(slots) == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]

    def test_capped_at_business_day_end(self):
        slots = generate_time_slots(WEDNESDAY, "20", NOW)
        assert slots[-1].slot_id == "20:30"
        assert len(slots) == 24

    def test_zero_hours_yields_nothing(self):
        assert generate_time_slots(WEDNESDAY, "0", NOW) == []

    def test_unparseable_hours_uses_default(self):
        assert len(generate_time_slots(WEDNESDAY, "whenever", NOW)) == 16

    def test_ordered_ascending(self):
        slots = generate_time_slots(WEDNESDAY, "12", NOW)
        starts = [s.start_datetime for s in slots]
        assert starts == sorted(starts)

    def test_labels(self):
        slots = generate_time_slots(WEDNESDAY, "12", NOW)
        labels = {s.slot_id: s.display_label for s in slots}
        assert labels["09:00"] == "9:00 AM"
        assert labels["12:00"] == "12:00 PM"
        assert labels["13:30"] == "1:30 PM"

    def test_start_datetime_on_selected_date(self):
        slot = generate_time_slots(WEDNESDAY, "1", NOW)[0]
        assert slot.start_datetime == datetime(2026, 10, 21, 9, 0)


class TestLeadTimeFloor:
    def test_today_floor_is_now_plus_thirty(self):
        now = datetime(2026, 10, 20, 14, 5)
        slots = generate_time_slots(TUESDAY, "12", now)
        assert slots[0].slot_id == "15:00"
        assert all(s.start_datetime >= now + timedelta(minutes=30) for s in slots)

    def test_exact_boundary_included(self):
        now = datetime(2026, 10, 20, 14, 0)
        assert generate_time_slots(TUESDAY, "12", now)[0].slot_id == "14:30"

    def test_seconds_are_ignored(self):
        now = datetime(2026, 10, 20, 14, 0, 45)
        assert generate_time_slots(TUESDAY, "12", now)[0].slot_id == "14:30"

    def test_before_business_hours_starts_at_lower_bound(self):
        now = datetime(2026, 10, 20, 7, 0)
        assert generate_time_slots(TUESDAY, "8", now)[0].slot_id == "09:00"

    def test_day_over(self):
        now = datetime(2026, 10, 20, 16, 45)
        assert generate_time_slots(TUESDAY, "8", now) == []

    def test_future_date_not_affected_by_time_of_day(self):
        now = datetime(2026, 10, 20, 23, 50)
        assert generate_time_slots(WEDNESDAY, "8", now)[0].slot_id == "09:00"

    def test_past_date_has_no_slots(self):
        assert generate_time_slots(TUESDAY - timedelta(days=1), "8", NOW) == []

    def test_timezone_carried_onto_slots(self):
        now = datetime(2026, 10, 20, 10, 0, tzinfo=timezone.utc)
        slot = generate_time_slots(WEDNESDAY, "8", now)[0]
        assert slot.start_datetime.utcoffset() == timedelta(0)


class TestBookedFilter:
    def test_booked_slot_removed_order_preserved(self):
        slots = [_slot("09:00"), _slot("09:30"), _slot("10:00")]
        assert _ids(filter_booked_slots(slots, ["09:30"])) == ["09:00", "10:00"]

    def test_exact_match_only(self):
        slots = [_slot("09:00"), _slot("09:30")]
        assert _ids(filter_booked_slots(slots, ["9:30", "09:30:00"])) == ["09:00", "09:30"]

    def test_nothing_booked(self):
        slots = [_slot("09:00")]
        assert filter_booked_slots(slots, []) == slots


class TestParseBookedMarkers:
    def test_list_of_strings(self):
        assert parse_booked_markers(["09:00", "10:30"]) == {"09:00", "10:30"}

    def test_list_of_objects(self):
        assert parse_booked_markers([{"time": "11:00"}, {"time": "11:30", "duration": 60}]) == {
            "11:00",
            "11:30",
        }

    def test_wrapped_list(self):
        assert parse_booked_markers({"success": True, "data": [{"time": "12:00"}]}) == {"12:00"}

    def test_malformed_entries_skipped(self):
        assert parse_booked_markers(["09:00", 5, {"start": "10:00"}, None]) == {"09:00"}

    def test_unexpected_shape(self):
        assert parse_booked_markers("09:00") == frozenset()
        assert parse_booked_markers({"message": "ok"}) == frozenset()
