"""Minute-of-hour arithmetic for session end times.

Codes carry only the minute at which the session ends; the hour is implied
and at most one wrap past the top of the hour is assumed.
"""

from shared.lib.codes.errors import FieldOutOfRangeError
from shared.lib.codes.layout import MAX_MINUTE

MINUTES_PER_HOUR = MAX_MINUTE + 1


def _check_minute(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_MINUTE:
        raise FieldOutOfRangeError(name, value, 0, MAX_MINUTE)


def end_minute_after(current_minute: int, duration_minutes: int) -> int:
    """Return the minute-of-hour ``duration_minutes`` after ``current_minute``."""
    _check_minute("current_minute", current_minute)
    _check_minute("duration_minutes", duration_minutes)
    return (current_minute + duration_minutes) % MINUTES_PER_HOUR


def minutes_remaining(end_minute: int, current_minute: int) -> int:
    """Minutes left until ``end_minute``, wrapping into the next hour."""
    _check_minute("end_minute", end_minute)
    _check_minute("current_minute", current_minute)
    remaining = end_minute - current_minute
    if remaining < 0:
        remaining += MINUTES_PER_HOUR
    return remaining
