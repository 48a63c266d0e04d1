from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import (
    DEFAULT_CLOCK_IN_COOLDOWN_HOURS,
    DEFAULT_EXTENDED_SHIFT_HOURS,
    DEFAULT_MIN_WORK_MINUTES,
    DEFAULT_PUNCH_MAX_SHIFT_HOURS,
)
from ..core.enums import PunchRule
from ..core.exceptions import ValidationError
from ..corrections.model import Violation
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRecordStore
from ..timeinput.parser import format_12_hour

logger = logging.getLogger(__name__)


def _hours_minutes(delta: timedelta) -> tuple[int, int]:
    seconds = max(int(delta.total_seconds()), 0)
    return seconds // 3600, (seconds % 3600) // 60


@dataclass(frozen=True)
class PunchPolicy:
    """Eligibility of a live clock-in or clock-out for one employee.

    Clock-in: the employee exists and is active, has no open entry, and the
    cooldown since the last completed entry has passed. Clock-out: an open
    entry exists, at least the minimum work time has elapsed and the shift
    is not past the maximum length.
    """

    records: ShiftRecordStore
    employees: EmployeeRepository
    clock: Callable[[], datetime] = now_local
    cooldown: timedelta = field(default_factory=lambda: timedelta(hours=DEFAULT_CLOCK_IN_COOLDOWN_HOURS))
    min_work_time: timedelta = field(default_factory=lambda: timedelta(minutes=DEFAULT_MIN_WORK_MINUTES))
    max_shift: timedelta = field(default_factory=lambda: timedelta(hours=DEFAULT_PUNCH_MAX_SHIFT_HOURS))
    extended_shift: timedelta = field(default_factory=lambda: timedelta(hours=DEFAULT_EXTENDED_SHIFT_HOURS))

    def check_clock_in(self, employee_id: int) -> Optional[Violation]:
        employee = self.employees.get_by_id(employee_id)
        if employee is None:
            return Violation(PunchRule.EMPLOYEE_NOT_FOUND, "Employee not found. Please try another ID.")
        name = employee.display_name
        if not employee.active:
            return Violation(PunchRule.EMPLOYEE_INACTIVE, f"{name} is not currently active.")

        open_entry = self.records.get_open_for_employee(employee_id)
        if open_entry is not None:
            return Violation(
                PunchRule.ALREADY_CLOCKED_IN,
                f"{name} is already clocked in since {format_12_hour(open_entry.clock_in)}.",
            )

        last = self.records.get_last_completed_for_employee(employee_id)
        if last is None:
            return None

        now = self.clock()
        since = now - last.clock_out_at()
        if since < self.cooldown:
            hours, minutes = _hours_minutes(self.cooldown - since)
            available_at = last.clock_out_at() + self.cooldown
            logger.info("Clock-in cooldown for employee %s, last clock-out %s", employee_id, last.clock_out_at())
            return Violation(
                PunchRule.COOLDOWN,
                f"{name} must wait {hours} hours and {minutes} minutes before clocking in again. "
                f"Available at {format_12_hour(available_at)}.",
            )
        return None

    def check_clock_out(self, employee_id: int) -> Optional[Violation]:
        employee = self.employees.get_by_id(employee_id)
        if employee is None:
            return Violation(PunchRule.EMPLOYEE_NOT_FOUND, "Employee not found. Cannot clock out.")
        name = employee.display_name

        open_entry = self.records.get_open_for_employee(employee_id)
        if open_entry is None:
            return Violation(PunchRule.NOT_CLOCKED_IN, f"{name} is not currently clocked in.")

        worked = self.clock() - open_entry.clock_in_at()
        if worked < self.min_work_time:
            minutes = int(self.min_work_time.total_seconds() // 60)
            return Violation(
                PunchRule.MIN_WORK_TIME,
                f"Cannot clock out within {minutes} minute{'' if minutes == 1 else 's'} of clocking in. "
                "Contact manager if this is an error.",
            )

        if worked > self.max_shift:
            hours, minutes = _hours_minutes(worked)
            return Violation(
                PunchRule.MAX_SHIFT,
                f"{name} has exceeded the maximum shift duration of {self.max_shift.total_seconds() / 3600:g} hours. "
                f"Current shift: {hours} hours {minutes} minutes. "
                "Please contact a manager to authorize this extended shift.",
            )

        if worked > self.extended_shift:
            hours, minutes = _hours_minutes(worked)
            logger.warning("Extended shift for employee %s: %sh %sm", employee_id, hours, minutes)
        return None

    def ensure_can_clock_in(self, employee_id: int) -> None:
        found = self.check_clock_in(employee_id)
        if found:
            raise ValidationError(found.message)

    def ensure_can_clock_out(self, employee_id: int) -> None:
        found = self.check_clock_out(employee_id)
        if found:
            raise ValidationError(found.message)
