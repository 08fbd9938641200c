"""
Domain-specific exception hierarchy for the studio break planner.
"""

from typing import List


class StudioBreakError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(StudioBreakError, ValueError):
    """Raised when a wall-clock value is not a valid zero-padded HH:MM time."""

    def __init__(self, value: object, reason: str = "expected zero-padded HH:MM"):
        self.value = value
        super().__init__(f"Invalid time {value!r}: {reason}")


class ScheduleValidationError(StudioBreakError):
    """Raised when a shooting request cannot be turned into booking rows."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ScheduleStoreError(StudioBreakError):
    """Raised when booking rows cannot be persisted or read back."""
