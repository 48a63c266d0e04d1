from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_hours(self, clock_in: datetime, clock_out: datetime) -> float:
        raise NotImplementedError

    @abstractmethod
    def worked_hours_for_times(self, clock_in: time, clock_out: time) -> float:
        raise NotImplementedError

    def gross_pay(self, hours: float | Decimal, pay_rate: Decimal) -> Decimal:
        return (to_hours_decimal(hours) * Decimal(pay_rate)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_hours_decimal(hours: float | Decimal) -> Decimal:
    """Hours as stored on a shift record (two decimals, never negative)."""
    value = Decimal(str(hours)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return max(value, Decimal("0.00"))
