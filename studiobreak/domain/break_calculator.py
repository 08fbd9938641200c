"""
Core business logic for break-time conflicts, schedule splits and work time.

Pure domain logic without any external dependencies (no database, no I/O).
Every function takes HH:MM strings and returns plain result objects that the
planning service and the CLI turn into booking rows or output.
"""

from typing import List, Optional, Sequence

from .models import (
    DEFAULT_BREAK_WINDOWS,
    BreakWindow,
    ConflictResult,
    ConflictType,
    SplitResult,
    TimeInterval,
)
from .time_utils import time_to_minutes


class BreakTimeCalculator:
    """
    Checks bookings against a fixed, ordered set of break windows.

    The order of ``break_windows`` is significant: conflict detection reports
    the first window that overlaps, so with the defaults a booking spanning
    both lunch and dinner is reported as a lunch conflict only.
    """

    def __init__(self, break_windows: Sequence[BreakWindow] = DEFAULT_BREAK_WINDOWS):
        self.break_windows = tuple(break_windows)

    def check_conflict(self, start_time: str, end_time: str) -> ConflictResult:
        """
        Check a booking against the break windows, first match wins.

        Args:
            start_time: Booking start as HH:MM
            end_time: Booking end as HH:MM

        Returns:
            ConflictResult carrying the matched window as the suggested break
        """
        conflicts = self.find_conflicts(start_time, end_time)
        if not conflicts:
            return ConflictResult.none()

        window = conflicts[0]
        return ConflictResult(
            has_conflict=True,
            conflict_type=ConflictType.for_window(window),
            suggested_break=window,
        )

    def find_conflicts(self, start_time: str, end_time: str) -> List[BreakWindow]:
        """Return every enabled break window the booking overlaps, in configured order."""
        schedule_start = time_to_minutes(start_time)
        schedule_end = time_to_minutes(end_time)

        return [
            window
            for window in self.break_windows
            if window.enabled
            and _overlaps(
                schedule_start,
                schedule_end,
                time_to_minutes(window.start_time),
                time_to_minutes(window.end_time),
            )
        ]

    def calculate_split(
        self,
        start_time: str,
        end_time: str,
        break_window: BreakWindow
    ) -> SplitResult:
        """
        Split a booking into the parts before and after a break window.

        A disabled window means the user chose to shoot through the break,
        so no split is produced. A booking that does not touch the window
        needs no split either.

        Example:
        Booking: 10:00 - 15:00
        Break: 12:00 - 13:00
        Result: [10:00-12:00, 13:00-15:00]

        A booking overlapping only one side of the break keeps just that
        side: 12:30 - 15:00 with the same break yields only 13:00-15:00.
        """
        if not break_window.enabled:
            return SplitResult.no_split()

        schedule_start = time_to_minutes(start_time)
        schedule_end = time_to_minutes(end_time)
        break_start = time_to_minutes(break_window.start_time)
        break_end = time_to_minutes(break_window.end_time)

        if schedule_end <= break_start or schedule_start >= break_end:
            return SplitResult.no_split()

        first_schedule = None
        if schedule_start < break_start:
            first_schedule = TimeInterval(start=start_time, end=break_window.start_time)

        second_schedule = None
        if schedule_end > break_end:
            second_schedule = TimeInterval(start=break_window.end_time, end=end_time)

        return SplitResult(
            needs_split=True,
            first_schedule=first_schedule,
            second_schedule=second_schedule,
            break_window=break_window,
        )

    def effective_work_minutes(
        self,
        start_time: str,
        end_time: str,
        break_window: Optional[BreakWindow] = None
    ) -> int:
        """
        Booked minutes minus any overlap with the break window.

        The total is not validated: a booking ending before it starts
        yields a negative result.
        """
        total_minutes = time_to_minutes(end_time) - time_to_minutes(start_time)

        if break_window is None or not break_window.enabled:
            return total_minutes

        overlap_start = max(time_to_minutes(start_time), time_to_minutes(break_window.start_time))
        overlap_end = min(time_to_minutes(end_time), time_to_minutes(break_window.end_time))
        overlap_minutes = max(0, overlap_end - overlap_start)

        return total_minutes - overlap_minutes


def _overlaps(start: int, end: int, other_start: int, other_end: int) -> bool:
    return start < other_end and end > other_start


_default_calculator = BreakTimeCalculator()


def check_break_time_conflict(
    start_time: str,
    end_time: str,
    break_windows: Optional[Sequence[BreakWindow]] = None
) -> ConflictResult:
    """Check a booking against lunch then dinner (or the given windows)."""
    calculator = _default_calculator if break_windows is None else BreakTimeCalculator(break_windows)
    return calculator.check_conflict(start_time, end_time)


def find_break_time_conflicts(
    start_time: str,
    end_time: str,
    break_windows: Optional[Sequence[BreakWindow]] = None
) -> List[BreakWindow]:
    calculator = _default_calculator if break_windows is None else BreakTimeCalculator(break_windows)
    return calculator.find_conflicts(start_time, end_time)


def calculate_schedule_split(start_time: str, end_time: str, break_window: BreakWindow) -> SplitResult:
    return _default_calculator.calculate_split(start_time, end_time, break_window)


def calculate_effective_work_time(
    start_time: str,
    end_time: str,
    break_window: Optional[BreakWindow] = None
) -> int:
    return _default_calculator.effective_work_minutes(start_time, end_time, break_window)
