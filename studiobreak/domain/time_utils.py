"""
Conversions between HH:MM wall-clock strings and minutes since midnight.
"""

import re

from .exceptions import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


def time_to_minutes(value: str) -> int:
    """
    Parse a zero-padded 24-hour ``HH:MM`` string into minutes since midnight.

    Raises:
        InvalidTimeFormat: If the value is not a string of the form ``HH:MM``
            with hours 00-23 and minutes 00-59.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(value, "expected a string")

    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormat(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23:
        raise InvalidTimeFormat(value, "hours must be between 00 and 23")
    if minutes > 59:
        raise InvalidTimeFormat(value, "minutes must be between 00 and 59")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Format minutes since midnight as ``HH:MM``.

    Values past the end of the day are not wrapped, so ``1500`` becomes
    ``"25:00"``. Negative values have no wall-clock meaning and are rejected.
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidTimeFormat(minutes, "expected an integer minute count")
    if minutes < 0:
        raise InvalidTimeFormat(minutes, "minute count must not be negative")

    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def is_valid_time(value: object) -> bool:
    """Return True if ``value`` parses as a zero-padded HH:MM time."""
    try:
        time_to_minutes(value)  # type: ignore[arg-type]
    except InvalidTimeFormat:
        return False
    return True
