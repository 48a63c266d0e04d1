from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

from ...core.constants import DEFAULT_LUNCH_DURATION_MINUTES, DEFAULT_LUNCH_THRESHOLD_HOURS
from ...core.exceptions import InvalidShiftOrderError
from .base import PayrollCalculator

_ONE_DAY = timedelta(days=1)


def total_hours(clock_in: datetime, clock_out: datetime, lunch_threshold: timedelta, lunch_duration: timedelta) -> float:
    """Worked hours between two instants, minus lunch once the threshold is reached.

    The instants carry their dates, so no midnight wrap is assumed: a
    clock-out that is not strictly after the clock-in is an error.
    """
    if clock_out <= clock_in:
        raise InvalidShiftOrderError("Clock out time must be after clock in time.")
    return _deduct_lunch(clock_out - clock_in, lunch_threshold, lunch_duration)


def total_hours_for_times(clock_in: time, clock_out: time, lunch_threshold: timedelta, lunch_duration: timedelta) -> float:
    """Worked hours between two times-of-day.

    A clock-out earlier than the clock-in is taken as the next day
    (22:00 -> 06:00 is eight hours).
    """
    start = _since_midnight(clock_in)
    end = _since_midnight(clock_out)
    elapsed = (_ONE_DAY - start) + end if end < start else end - start
    return _deduct_lunch(elapsed, lunch_threshold, lunch_duration)


def _since_midnight(value: time) -> timedelta:
    return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second, microseconds=value.microsecond)


def _deduct_lunch(elapsed: timedelta, lunch_threshold: timedelta, lunch_duration: timedelta) -> float:
    hours = elapsed.total_seconds() / 3600
    if elapsed >= lunch_threshold:
        hours -= lunch_duration.total_seconds() / 3600
    return max(hours, 0.0)


def format_duration(duration: timedelta) -> str:
    """Human-readable duration: "8.5 hours" or "45 minutes"."""
    hours = duration.total_seconds() / 3600
    if hours >= 1:
        return f"{hours:.1f} hours"
    return f"{duration.total_seconds() / 60:.0f} minutes"


@dataclass(frozen=True)
class LunchDeductionCalculator(PayrollCalculator):
    """Standard rule: (out - in), minus an unpaid lunch on long shifts, not below 0."""

    lunch_threshold: timedelta = field(default_factory=lambda: timedelta(hours=DEFAULT_LUNCH_THRESHOLD_HOURS))
    lunch_duration: timedelta = field(default_factory=lambda: timedelta(minutes=DEFAULT_LUNCH_DURATION_MINUTES))

    def worked_hours(self, clock_in: datetime, clock_out: datetime) -> float:
        return total_hours(clock_in, clock_out, self.lunch_threshold, self.lunch_duration)

    def worked_hours_for_times(self, clock_in: time, clock_out: time) -> float:
        return total_hours_for_times(clock_in, clock_out, self.lunch_threshold, self.lunch_duration)
