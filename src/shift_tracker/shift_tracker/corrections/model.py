from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import CorrectionField, CorrectionRule, CorrectionState, PunchRule
from ..shifts.model import ShiftRecord


@dataclass(frozen=True)
class CorrectionDraft:
    """Value type holding everything a manager has entered in one session.

    Every edit produces a new draft; a failed apply therefore leaves the
    manager's inputs exactly as they were.
    """

    original_clock_in: datetime
    original_clock_out: Optional[datetime]
    manager: str
    opened_at: datetime
    clock_in_enabled: bool = False
    clock_out_enabled: bool = False
    proposed_clock_in: Optional[datetime] = None
    proposed_clock_out: Optional[datetime] = None
    reason: str = ""
    state: CorrectionState = CorrectionState.DRAFT

    def is_enabled(self, field: CorrectionField) -> bool:
        if field == CorrectionField.CLOCK_IN:
            return self.clock_in_enabled
        return self.clock_out_enabled

    def proposed(self, field: CorrectionField) -> Optional[datetime]:
        if field == CorrectionField.CLOCK_IN:
            return self.proposed_clock_in
        return self.proposed_clock_out

    def original(self, field: CorrectionField) -> Optional[datetime]:
        if field == CorrectionField.CLOCK_IN:
            return self.original_clock_in
        return self.original_clock_out

    def effective_clock_in(self) -> datetime:
        if self.clock_in_enabled and self.proposed_clock_in is not None:
            return self.proposed_clock_in
        return self.original_clock_in

    def effective_clock_out(self) -> Optional[datetime]:
        if self.clock_out_enabled and self.proposed_clock_out is not None:
            return self.proposed_clock_out
        return self.original_clock_out

    @property
    def is_terminal(self) -> bool:
        return self.state in {CorrectionState.APPLIED, CorrectionState.CANCELLED}


@dataclass(frozen=True)
class Violation:
    rule: CorrectionRule | PunchRule
    message: str


@dataclass(frozen=True)
class CorrectionPreview:
    """Read-model for the live summary shown while editing."""

    clock_in: datetime
    clock_out: Optional[datetime]
    total_hours: Optional[Decimal]
    gross_pay: Optional[Decimal]
    message: Optional[str] = None


@dataclass(frozen=True)
class ApplyResult:
    success: bool
    message: Optional[str] = None
    record: Optional[ShiftRecord] = None
