"""
Domain models for booking intervals, break windows and calculation results.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .time_utils import time_to_minutes


@dataclass(frozen=True)
class TimeInterval:
    """
    Represents a half-open wall-clock range [start, end) on a single day.

    Unlike a booking row, the interval does not insist on start < end;
    durations of reversed intervals simply come out negative.
    """
    start: str
    end: str

    def __post_init__(self):
        # Parse eagerly so malformed times fail at construction.
        time_to_minutes(self.start)
        time_to_minutes(self.end)

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    def duration_minutes(self) -> int:
        """Return the duration in minutes (negative if end precedes start)."""
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another."""
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes

    def overlap_minutes(self, other: "TimeInterval") -> int:
        """Return the number of minutes shared with another interval, never below zero."""
        overlap_start = max(self.start_minutes, other.start_minutes)
        overlap_end = min(self.end_minutes, other.end_minutes)
        return max(0, overlap_end - overlap_start)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class BreakWindow:
    """
    A named break period that bookings may have to work around.

    ``duration_minutes`` is derived from the two times when not given and
    must agree with them when it is.
    """
    name: str
    start_time: str
    end_time: str
    enabled: bool = True
    duration_minutes: Optional[int] = field(default=None)

    def __post_init__(self):
        start = time_to_minutes(self.start_time)
        end = time_to_minutes(self.end_time)
        if self.duration_minutes is None:
            object.__setattr__(self, "duration_minutes", end - start)
        elif self.duration_minutes != end - start:
            raise ValueError(
                f"Break '{self.name}' lasts {end - start} minutes, "
                f"not {self.duration_minutes}"
            )

    def as_interval(self) -> TimeInterval:
        return TimeInterval(start=self.start_time, end=self.end_time)

    def with_times(self, start_time: str, end_time: str) -> "BreakWindow":
        """Return a copy moved to new times with the duration recomputed."""
        return replace(
            self,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=time_to_minutes(end_time) - time_to_minutes(start_time),
        )

    def disabled(self) -> "BreakWindow":
        return replace(self, enabled=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the keys the booking form and row store expect."""
        return {
            "enabled": self.enabled,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "durationMinutes": self.duration_minutes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "custom") -> "BreakWindow":
        return cls(
            name=data.get("name", name),
            start_time=data["startTime"],
            end_time=data["endTime"],
            enabled=bool(data.get("enabled", True)),
            duration_minutes=data.get("durationMinutes"),
        )

    def __str__(self) -> str:
        return f"{self.name} {self.start_time}-{self.end_time}"


class ConflictType(str, Enum):
    """Kind of break window a booking collides with."""
    LUNCH = "lunch"
    DINNER = "dinner"
    CUSTOM = "custom"

    @classmethod
    def for_window(cls, window: BreakWindow) -> "ConflictType":
        try:
            return cls(window.name)
        except ValueError:
            return cls.CUSTOM


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of checking a booking against the configured break windows."""
    has_conflict: bool
    conflict_type: Optional[ConflictType] = None
    suggested_break: Optional[BreakWindow] = None

    @classmethod
    def none(cls) -> "ConflictResult":
        return cls(has_conflict=False)


@dataclass(frozen=True)
class SplitResult:
    """
    Outcome of splitting a booking around a break window.

    When the booking only overlaps one side of the break, the sub-interval
    on the other side does not exist and is left as None.
    """
    needs_split: bool
    first_schedule: Optional[TimeInterval] = None
    second_schedule: Optional[TimeInterval] = None
    break_window: Optional[BreakWindow] = None

    @classmethod
    def no_split(cls) -> "SplitResult":
        return cls(needs_split=False)

    def schedules(self) -> List[TimeInterval]:
        """Return the sub-intervals that actually exist, in order."""
        return [
            interval
            for interval in (self.first_schedule, self.second_schedule)
            if interval is not None
        ]


LUNCH_BREAK = BreakWindow(name="lunch", start_time="12:00", end_time="13:00")
DINNER_BREAK = BreakWindow(name="dinner", start_time="18:00", end_time="19:00")

DEFAULT_BREAK_WINDOWS: Tuple[BreakWindow, ...] = (LUNCH_BREAK, DINNER_BREAK)
