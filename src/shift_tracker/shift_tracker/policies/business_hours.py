from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import TypeVar

from ..common.datetime_utils import time_of_day

T = TypeVar("T", time, datetime)


def is_within_window(value: time | datetime, start: time, end: time) -> bool:
    """True when the time-of-day falls inside [start, end].

    A window whose end is earlier than its start runs past midnight
    (22:00-02:00 accepts 23:30 and 01:00).
    """
    t = time_of_day(value)
    if end >= start:
        return start <= t <= end
    return t >= start or t <= end


def is_outside_restricted_window(value: time | datetime, restricted_start: time, restricted_end: time) -> bool:
    """True (allowed) when the time-of-day is NOT inside the restricted window."""
    return not is_within_window(value, restricted_start, restricted_end)


def round_to_nearest_interval(value: T, interval_minutes: int = 15) -> T:
    """Round the minute component to the nearest multiple of the interval.

    Halves round up. Reaching minute 60 carries into the next hour. A carry
    out of hour 23 would cross into the next day, which is left undefined:
    the value is returned unchanged, as it is for a non-positive interval.
    """
    if interval_minutes <= 0:
        return value

    rounded = (2 * value.minute + interval_minutes) // (2 * interval_minutes) * interval_minutes
    hour = value.hour
    if rounded >= 60:
        if hour == 23:
            return value
        hour += 1
        rounded = 0

    return value.replace(hour=hour, minute=rounded, second=0, microsecond=0)


@dataclass(frozen=True)
class BusinessHoursPolicy:
    """Window in which clock operations are accepted."""

    start: time
    end: time

    @property
    def wraps_midnight(self) -> bool:
        return self.end < self.start

    def allows(self, value: time | datetime) -> bool:
        return is_within_window(value, self.start, self.end)


@dataclass(frozen=True)
class RestrictedHoursPolicy:
    """Window in which clock operations are refused (24-hour operations)."""

    start: time
    end: time

    def allows(self, value: time | datetime) -> bool:
        return is_outside_restricted_window(value, self.start, self.end)
