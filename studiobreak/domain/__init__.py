"""
Domain layer - Pure business logic without external dependencies.
"""

from .break_calculator import (
    BreakTimeCalculator,
    calculate_effective_work_time,
    calculate_schedule_split,
    check_break_time_conflict,
    find_break_time_conflicts,
)
from .models import (
    DEFAULT_BREAK_WINDOWS,
    DINNER_BREAK,
    LUNCH_BREAK,
    BreakWindow,
    ConflictResult,
    ConflictType,
    SplitResult,
    TimeInterval,
)
from .time_utils import minutes_to_time, time_to_minutes

__all__ = [
    "BreakTimeCalculator",
    "BreakWindow",
    "ConflictResult",
    "ConflictType",
    "DEFAULT_BREAK_WINDOWS",
    "DINNER_BREAK",
    "LUNCH_BREAK",
    "SplitResult",
    "TimeInterval",
    "calculate_effective_work_time",
    "calculate_schedule_split",
    "check_break_time_conflict",
    "find_break_time_conflicts",
    "minutes_to_time",
    "time_to_minutes",
]
