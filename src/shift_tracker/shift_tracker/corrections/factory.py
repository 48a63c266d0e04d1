from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import (
    DEFAULT_MAX_SHIFT_HOURS,
    DEFAULT_SIMPLE_REASON_MIN_LENGTH,
    DEFAULT_TEMPLATED_REASON_MIN_LENGTH,
)
from ..core.enums import CorrectionField
from ..employees.model import Employee
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.lunch_deduction import LunchDeductionCalculator
from ..shifts.model import ShiftRecord
from ..shifts.repository import ShiftRecordStore
from .strategies.flat_length import FlatLengthReasonPolicy
from .strategies.templated import TemplatedReasonPolicy
from .workflow import CorrectionWorkflow


@dataclass
class CorrectionWorkflowFactory:
    """Factory Pattern: build the correction session a call site needs."""

    store: ShiftRecordStore
    calculator: PayrollCalculator = field(default_factory=LunchDeductionCalculator)
    clock: Callable[[], datetime] = now_local
    simple_reason_min_length: int = DEFAULT_SIMPLE_REASON_MIN_LENGTH
    templated_reason_min_length: int = DEFAULT_TEMPLATED_REASON_MIN_LENGTH
    max_shift_hours: Optional[float] = DEFAULT_MAX_SHIFT_HOURS

    def clock_out_only(self, record: ShiftRecord, employee: Employee, *, manager: str) -> CorrectionWorkflow:
        """Single-field session: fix a clock-out, flat reason length, capped duration."""
        workflow = CorrectionWorkflow(
            record,
            employee,
            manager=manager,
            store=self.store,
            reason_policy=FlatLengthReasonPolicy(min_length=self.simple_reason_min_length),
            calculator=self.calculator,
            clock=self.clock,
            allowed_fields=(CorrectionField.CLOCK_OUT,),
            max_shift_hours=self.max_shift_hours,
        )
        workflow.enable_field(CorrectionField.CLOCK_OUT)
        return workflow

    def dual(self, record: ShiftRecord, employee: Employee, *, manager: str) -> CorrectionWorkflow:
        """Clock-in and clock-out session with a templated reason."""
        return CorrectionWorkflow(
            record,
            employee,
            manager=manager,
            store=self.store,
            reason_policy=TemplatedReasonPolicy(min_length=self.templated_reason_min_length),
            calculator=self.calculator,
            clock=self.clock,
        )
