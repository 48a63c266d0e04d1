from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: one clock-in/clock-out pair of an employee.

    Owned by the record store; the engine derives updated copies and never
    edits an instance in place.
    """

    record_id: int
    employee_id: int
    shift_date: date
    clock_in: time
    clock_out: Optional[time] = None
    total_hours: Decimal = Decimal("0.00")
    gross_pay: Decimal = Decimal("0.00")
    notes: str = ""
    is_active: bool = False

    def clock_in_at(self) -> datetime:
        return datetime.combine(self.shift_date, self.clock_in)

    def clock_out_at(self) -> Optional[datetime]:
        """Clock-out instant; an earlier time-of-day than clock-in means the next day."""
        if self.clock_out is None:
            return None
        out = datetime.combine(self.shift_date, self.clock_out)
        if self.clock_out < self.clock_in:
            out += timedelta(days=1)
        return out
