"""
Tests for domain models.
"""

import pytest

from studiobreak.domain.exceptions import InvalidTimeFormat
from studiobreak.domain.models import (
    DEFAULT_BREAK_WINDOWS,
    DINNER_BREAK,
    LUNCH_BREAK,
    BreakWindow,
    ConflictType,
    SplitResult,
    TimeInterval,
)


class TestTimeInterval:
    """Tests for TimeInterval model."""

    def test_create_valid_interval(self):
        """Test creating an interval and reading its duration."""
        interval = TimeInterval(start="09:00", end="17:00")

        assert interval.start_minutes == 540
        assert interval.end_minutes == 1020
        assert interval.duration_minutes() == 480
        assert str(interval) == "09:00-17:00"

    def test_reversed_interval_is_allowed(self):
        """Reversed intervals are the caller's problem and report negative duration."""
        interval = TimeInterval(start="15:00", end="14:00")

        assert interval.duration_minutes() == -60

    def test_malformed_time_raises_error(self):
        with pytest.raises(InvalidTimeFormat):
            TimeInterval(start="9:00", end="10:00")

    def test_overlaps(self):
        """Test half-open overlap detection."""
        tr1 = TimeInterval(start="09:00", end="12:00")
        tr2 = TimeInterval(start="11:00", end="14:00")
        tr3 = TimeInterval(start="12:00", end="17:00")

        assert tr1.overlaps(tr2)
        assert tr2.overlaps(tr1)
        # Touching at 12:00 is not an overlap
        assert not tr1.overlaps(tr3)

    def test_overlap_minutes(self):
        tr1 = TimeInterval(start="12:30", end="14:00")

        assert tr1.overlap_minutes(LUNCH_BREAK.as_interval()) == 30
        assert tr1.overlap_minutes(DINNER_BREAK.as_interval()) == 0


class TestBreakWindow:
    """Tests for BreakWindow model."""

    def test_default_windows(self):
        """Lunch is checked before dinner."""
        assert DEFAULT_BREAK_WINDOWS == (LUNCH_BREAK, DINNER_BREAK)
        assert LUNCH_BREAK.start_time == "12:00"
        assert LUNCH_BREAK.end_time == "13:00"
        assert LUNCH_BREAK.duration_minutes == 60
        assert DINNER_BREAK.start_time == "18:00"
        assert DINNER_BREAK.end_time == "19:00"
        assert DINNER_BREAK.duration_minutes == 60

    def test_duration_is_derived(self):
        window = BreakWindow(name="custom", start_time="12:15", end_time="12:45")

        assert window.duration_minutes == 30
        assert window.enabled

    def test_with_times_recomputes_duration(self):
        moved = LUNCH_BREAK.with_times("12:30", "13:30")

        assert moved.name == "lunch"
        assert moved.start_time == "12:30"
        assert moved.duration_minutes == 60
        assert LUNCH_BREAK.start_time == "12:00"

        shortened = LUNCH_BREAK.with_times("12:00", "12:40")
        assert shortened.duration_minutes == 40

    def test_disabled(self):
        window = LUNCH_BREAK.disabled()

        assert not window.enabled
        assert LUNCH_BREAK.enabled

    def test_to_dict_and_from_dict(self):
        data = LUNCH_BREAK.to_dict()

        assert data == {
            "enabled": True,
            "startTime": "12:00",
            "endTime": "13:00",
            "durationMinutes": 60,
        }

        window = BreakWindow.from_dict({"enabled": False, "startTime": "18:00", "endTime": "18:30"})
        assert window.name == "custom"
        assert not window.enabled
        assert window.duration_minutes == 30

    def test_from_dict_with_matching_duration(self):
        window = BreakWindow.from_dict({"startTime": "12:00", "endTime": "13:00", "durationMinutes": 60})

        assert window.to_dict()["durationMinutes"] == 60

    def test_mismatched_duration_rejected(self):
        """A stated duration that disagrees with the times is refused."""
        with pytest.raises(ValueError, match="lasts 60 minutes, not 45"):
            BreakWindow.from_dict({"startTime": "12:00", "endTime": "13:00", "durationMinutes": 45})


class TestResults:
    """Tests for result helpers."""

    def test_conflict_type_for_window(self):
        assert ConflictType.for_window(LUNCH_BREAK) is ConflictType.LUNCH
        assert ConflictType.for_window(DINNER_BREAK) is ConflictType.DINNER
        custom = BreakWindow(name="tea", start_time="15:00", end_time="15:15")
        assert ConflictType.for_window(custom) is ConflictType.CUSTOM

    def test_split_schedules_skips_missing_parts(self):
        result = SplitResult(
            needs_split=True,
            first_schedule=None,
            second_schedule=TimeInterval(start="13:00", end="15:00"),
            break_window=LUNCH_BREAK,
        )

        assert result.schedules() == [TimeInterval(start="13:00", end="15:00")]
        assert SplitResult.no_split().schedules() == []
