from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee needed for pay recomputation and punch checks."""

    employee_id: int
    display_name: str
    pay_rate: Decimal
    active: bool = True
