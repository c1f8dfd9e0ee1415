"""Tests for availability computation and slot scoring."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from inbox_triage.calendar.slots import (
    ScoredSlot,
    TimeSlot,
    compute_available_slots,
    pick_best_slot,
    score_slot,
    suggest_slots,
)

TZ = ZoneInfo("America/New_York")
MONDAY = date(2025, 1, 13)


def at(day: int, hour: int, minute: int = 0) -> datetime:
    """Local datetime on 2025-01-<day>."""
    return datetime(2025, 1, day, hour, minute, tzinfo=TZ)


def slot(day: int, hour: int, minute: int = 0, minutes: int = 30) -> TimeSlot:
    start = at(day, hour, minute)
    return TimeSlot(start=start, end=start + timedelta(minutes=minutes))


class TestTimeSlot:
    """Tests for TimeSlot helpers."""

    def test_duration_minutes(self):
        assert slot(13, 9, minutes=45).duration_minutes() == 45

    def test_str_same_day(self):
        assert str(slot(13, 9)) == "Mon Jan 13: 09:00 AM - 09:30 AM"

    def test_to_dict(self):
        data = slot(13, 9).to_dict()

        assert data["start"] == "2025-01-13T09:00:00-05:00"
        assert data["duration_minutes"] == 30


class TestComputeAvailableSlots:
    """Tests for compute_available_slots."""

    def test_empty_calendar_fills_working_day(self):
        slots = compute_available_slots(at(13, 8), at(13, 18), [], 60, tz=TZ)

        assert [s.start.hour for s in slots] == [9, 10, 11, 12, 13, 14, 15, 16]
        assert all(s.duration_minutes() == 60 for s in slots)

    def test_busy_interval_is_excluded(self):
        busy = [TimeSlot(at(13, 10), at(13, 11, 30))]

        slots = compute_available_slots(at(13, 8), at(13, 18), busy, 60, tz=TZ)

        assert [(s.start.hour, s.start.minute) for s in slots] == [
            (9, 0),
            (11, 30),
            (12, 30),
            (13, 30),
            (14, 30),
            (15, 30),
        ]
        assert not any(s.start < busy[0].end and busy[0].start < s.end for s in slots)

    def test_utc_busy_intervals_are_converted(self):
        # 15:00Z-16:00Z is 10:00-11:00 in New York in January
        busy = [
            TimeSlot(
                datetime(2025, 1, 13, 15, 0, tzinfo=timezone.utc),
                datetime(2025, 1, 13, 16, 0, tzinfo=timezone.utc),
            )
        ]

        slots = compute_available_slots(at(13, 8), at(13, 18), busy, 60, tz=TZ)

        assert 10 not in [s.start.hour for s in slots]
        assert len(slots) == 7

    def test_weekends_are_skipped(self):
        slots = compute_available_slots(at(18, 0), at(19, 23), [], 30, tz=TZ)

        assert slots == []

    def test_window_spanning_weekend(self):
        slots = compute_available_slots(at(17, 16), at(20, 10), [], 60, tz=TZ)

        # Friday 16:00 and Monday 09:00
        assert [(s.start.day, s.start.hour) for s in slots] == [(17, 16), (20, 9)]

    def test_start_is_rounded_up_to_quarter_hour(self):
        slots = compute_available_slots(at(13, 9, 7), at(13, 10), [], 15, tz=TZ)

        assert slots[0].start == at(13, 9, 15)

    def test_custom_working_hours(self):
        slots = compute_available_slots(
            at(13, 0), at(13, 23), [], 60, tz=TZ, work_start_hour=8, work_end_hour=10
        )

        assert [s.start.hour for s in slots] == [8, 9]

    def test_fully_booked_day(self):
        busy = [TimeSlot(at(13, 8), at(13, 18))]

        assert compute_available_slots(at(13, 8), at(13, 18), busy, 30, tz=TZ) == []

    def test_end_before_start(self):
        assert compute_available_slots(at(13, 12), at(13, 9), [], 30, tz=TZ) == []

    def test_gap_shorter_than_duration_is_skipped(self):
        busy = [TimeSlot(at(13, 9, 20), at(13, 17))]

        assert compute_available_slots(at(13, 9), at(13, 17), busy, 30, tz=TZ) == []

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            compute_available_slots(at(13, 9), at(13, 17), [], 0, tz=TZ)


class TestScoreSlot:
    """Tests for slot scoring."""

    def test_best_possible_slot(self):
        # Tuesday 10:00, same day
        assert score_slot(slot(14, 10), today=date(2025, 1, 14)) == pytest.approx(1.0)

    def test_day_offset_penalty(self):
        # Tuesday 10:00, one day out
        assert score_slot(slot(14, 10), today=MONDAY) == pytest.approx(0.95)

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (10, 0.9),
            (11, 0.9),
            (14, 0.8),
            (15, 0.8),
            (9, 0.7),
            (12, 0.7),
            (16, 0.7),
            (8, 0.6),
            (17, 0.6),
        ],
    )
    def test_hour_bonus(self, hour, expected):
        # Monday, same day: 0.5 base + 0.1 weekday bonus
        assert score_slot(slot(13, hour), today=MONDAY) == pytest.approx(expected)

    def test_weekend_has_no_day_bonus(self):
        saturday = date(2025, 1, 18)
        assert score_slot(slot(18, 10), today=saturday) == pytest.approx(0.8)

    def test_past_slots_are_not_rewarded(self):
        assert score_slot(slot(13, 10), today=date(2025, 1, 15)) == pytest.approx(0.9)

    def test_clamped_to_zero(self):
        assert score_slot(slot(13, 8), today=date(2024, 12, 1)) == 0.0

    @pytest.mark.parametrize("hour", [9, 10, 14, 16])
    def test_later_day_never_outscores_earlier_day(self, hour):
        # Tue/Wed/Thu share a weekday bonus, as do Mon and the following Mon
        pairs = [(14, 15), (15, 16), (14, 16), (13, 20)]
        for earlier, later in pairs:
            assert score_slot(slot(later, hour), MONDAY) <= score_slot(slot(earlier, hour), MONDAY)


class TestSuggestSlots:
    """Tests for ranking candidate slots."""

    def test_orders_by_score(self):
        slots = [slot(13, 9), slot(14, 10), slot(13, 14)]

        suggestions = suggest_slots(slots, today=MONDAY)

        assert [s.slot for s in suggestions] == [slot(14, 10), slot(13, 14), slot(13, 9)]

    def test_ties_go_to_earliest_start(self):
        slots = [slot(14, 11), slot(14, 10, 30), slot(14, 10)]

        suggestions = suggest_slots(slots, today=MONDAY)

        assert [s.slot.start for s in suggestions] == [at(14, 10), at(14, 10, 30), at(14, 11)]

    def test_limit(self):
        slots = [slot(13, hour) for hour in range(9, 17)]

        assert len(suggest_slots(slots, today=MONDAY, limit=3)) == 3

    def test_pick_best_slot(self):
        best = pick_best_slot([slot(13, 9), slot(13, 10)], today=MONDAY)

        assert isinstance(best, ScoredSlot)
        assert best.slot == slot(13, 10)
        assert best.day_of_week == "Monday"

    def test_pick_best_slot_empty(self):
        assert pick_best_slot([], today=MONDAY) is None
