from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, FrozenSet, Iterable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import AUDIT_NOTE_SEPARATOR
from ..core.enums import CorrectionField, CorrectionRule, CorrectionState
from ..core.exceptions import InvalidStateError, ValidationError
from ..employees.model import Employee
from ..payroll.calculator.base import PayrollCalculator, to_hours_decimal
from ..payroll.calculator.lunch_deduction import LunchDeductionCalculator
from ..shifts.model import ShiftRecord
from ..shifts.repository import ShiftRecordStore
from ..timeinput.parser import format_12_hour
from .model import ApplyResult, CorrectionDraft, CorrectionPreview, Violation
from .strategies.base import ReasonPolicy

logger = logging.getLogger(__name__)

_LABELS = {
    CorrectionField.CLOCK_IN: "Clock-in",
    CorrectionField.CLOCK_OUT: "Clock-out",
}

ORDER_MESSAGE = "Clock-out time must be after clock-in time."
APPLY_FAILED_MESSAGE = "Failed to apply corrections. Please try again."
SPANS_DAY_MESSAGE = "A shift cannot last 24 hours or more."

_ONE_DAY = timedelta(days=1)


class CorrectionWorkflow:
    """One manager session correcting the clock-in and/or clock-out of a record.

    States: DRAFT -> EDITING -> APPLIED | CANCELLED. Validation is a pure
    predicate re-evaluated on demand; only ``apply`` touches the store.
    """

    def __init__(
        self,
        record: ShiftRecord,
        employee: Employee,
        *,
        manager: str,
        store: ShiftRecordStore,
        reason_policy: ReasonPolicy,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
        allowed_fields: Iterable[CorrectionField] = tuple(CorrectionField),
        max_shift_hours: Optional[float] = None,
    ):
        self._record = record
        self._employee = employee
        self._store = store
        self._reason_policy = reason_policy
        self._calculator = calculator or LunchDeductionCalculator()
        self._clock = clock
        self._allowed: FrozenSet[CorrectionField] = frozenset(allowed_fields)
        self._max_shift_hours = max_shift_hours
        self._applying = False
        self._applied_record: Optional[ShiftRecord] = None

        opened_at = clock()
        self._draft = CorrectionDraft(
            original_clock_in=record.clock_in_at(),
            original_clock_out=record.clock_out_at(),
            manager=manager,
            opened_at=opened_at,
            reason=reason_policy.template(manager=manager, now=opened_at),
        )

    @property
    def draft(self) -> CorrectionDraft:
        return self._draft

    @property
    def state(self) -> CorrectionState:
        return self._draft.state

    @property
    def record(self) -> ShiftRecord:
        """The record as last persisted by this session (or as received)."""
        return self._applied_record or self._record

    @property
    def allowed_fields(self) -> FrozenSet[CorrectionField]:
        return self._allowed

    # Editing

    def enable_field(self, field: CorrectionField, enabled: bool = True) -> None:
        """Toggle correction of one side.

        Enabling a side with no proposed value yet starts it from the original.
        """
        field = CorrectionField(field)
        if field not in self._allowed:
            raise ValidationError(f"{_LABELS[field]} cannot be corrected in this session")

        changes = {f"{field.value}_enabled": bool(enabled)}
        if enabled and self._draft.proposed(field) is None:
            changes[f"proposed_{field.value}"] = self._draft.original(field)
        self._edit(**changes)

    def set_proposed_time(self, field: CorrectionField, value: Optional[datetime]) -> None:
        field = CorrectionField(field)
        if field not in self._allowed:
            raise ValidationError(f"{_LABELS[field]} cannot be corrected in this session")
        self._edit(**{f"proposed_{field.value}": value})

    def set_reason(self, text: str) -> None:
        self._edit(reason=text or "")

    def _edit(self, **changes) -> None:
        self._ensure_open()
        self._draft = replace(self._draft, state=CorrectionState.EDITING, **changes)

    def _ensure_open(self) -> None:
        if self._draft.is_terminal:
            raise InvalidStateError(f"Correction session is already {self._draft.state.value.lower()}")
        if self._applying:
            raise InvalidStateError("Corrections are being applied")

    # Validation

    def violation(self) -> Optional[Violation]:
        d = self._draft
        if not (d.clock_in_enabled or d.clock_out_enabled):
            return Violation(CorrectionRule.NOTHING_SELECTED, "Select at least one time to correct.")

        reason_failure = self._reason_policy.check(d.reason)
        if reason_failure:
            return Violation(CorrectionRule.REASON, reason_failure)

        now = self._clock()
        for field in (CorrectionField.CLOCK_IN, CorrectionField.CLOCK_OUT):
            if not d.is_enabled(field):
                continue
            proposed = d.proposed(field)
            if proposed is None:
                return Violation(CorrectionRule.MISSING_TIME, f"Invalid {_LABELS[field].lower()} correction time.")
            if proposed > now:
                return Violation(CorrectionRule.FUTURE_TIME, f"{_LABELS[field]} time cannot be in the future.")

        # A side that is not enabled keeps its original value, so this one
        # comparison covers both-corrected and single-corrected drafts.
        clock_in = d.effective_clock_in()
        clock_out = d.effective_clock_out()
        if clock_out is None:
            return None
        if clock_out <= clock_in:
            return Violation(CorrectionRule.ORDER, ORDER_MESSAGE)

        if self._calculator.worked_hours(clock_in, clock_out) <= 0:
            return Violation(
                CorrectionRule.NON_POSITIVE_TOTAL,
                "Total hours cannot be zero or negative. Please ensure clock-out time is after clock-in time.",
            )

        span = clock_out - clock_in
        if self._max_shift_hours is not None and span >= timedelta(hours=self._max_shift_hours):
            return Violation(
                CorrectionRule.MAX_DURATION,
                f"Shift duration must be less than {self._max_shift_hours:g} hours.",
            )

        # Records keep times of day; a clock-out a full day or more later cannot be stored.
        if span >= _ONE_DAY:
            return Violation(CorrectionRule.SPANS_DAY, SPANS_DAY_MESSAGE)
        return None

    def validate(self) -> Optional[str]:
        """First failure message, or None when the draft can be applied."""
        found = self.violation()
        return found.message if found else None

    def preview(self) -> CorrectionPreview:
        d = self._draft
        found = self.violation()
        clock_out = d.effective_clock_out()
        if found or clock_out is None:
            return CorrectionPreview(
                clock_in=d.effective_clock_in(),
                clock_out=clock_out,
                total_hours=None,
                gross_pay=None,
                message=found.message if found else None,
            )

        hours, pay = self._totals(d.effective_clock_in(), clock_out)
        return CorrectionPreview(clock_in=d.effective_clock_in(), clock_out=clock_out, total_hours=hours, gross_pay=pay)

    # Apply / cancel

    def apply(self) -> ApplyResult:
        prepared = self._prepare()
        if isinstance(prepared, ApplyResult):
            return prepared

        try:
            ok = self._store.update(prepared)
        except Exception as exc:
            return self._persist_failed(exc)
        return self._finish(bool(ok), prepared)

    async def apply_async(self) -> ApplyResult:
        """Apply with the blocking store call off the event loop.

        Session state is only touched back on the loop once the call has
        completed; edits and cancel are refused while it is in flight.
        """
        prepared = self._prepare()
        if isinstance(prepared, ApplyResult):
            return prepared

        loop = asyncio.get_running_loop()
        self._applying = True
        try:
            ok = await loop.run_in_executor(None, self._store.update, prepared)
        except Exception as exc:
            return self._persist_failed(exc)
        finally:
            self._applying = False
        return self._finish(bool(ok), prepared)

    def cancel(self) -> None:
        self._ensure_open()
        self._draft = replace(self._draft, state=CorrectionState.CANCELLED)
        logger.info("Correction cancelled for record %s", self._record.record_id)

    def _prepare(self) -> ShiftRecord | ApplyResult:
        self._ensure_open()
        found = self.violation()
        if found:
            return ApplyResult(success=False, message=found.message)
        return self._updated_record(self._clock())

    def _finish(self, ok: bool, updated: ShiftRecord) -> ApplyResult:
        if not ok:
            logger.warning("Failed to update time entry %s for employee %s", updated.record_id, updated.employee_id)
            return ApplyResult(success=False, message=APPLY_FAILED_MESSAGE)

        self._applied_record = updated
        self._draft = replace(self._draft, state=CorrectionState.APPLIED)
        logger.info(
            "Manager time correction applied - employee=%s record=%s manager=%s",
            updated.employee_id,
            updated.record_id,
            self._draft.manager,
        )
        return ApplyResult(success=True, record=updated)

    def _persist_failed(self, exc: Exception) -> ApplyResult:
        logger.exception("Failed to apply time corrections for record %s", self._record.record_id)
        return ApplyResult(success=False, message=f"Error applying corrections: {exc}")

    def _totals(self, clock_in: datetime, clock_out: datetime) -> tuple[Decimal, Decimal]:
        hours = to_hours_decimal(self._calculator.worked_hours(clock_in, clock_out))
        return hours, self._calculator.gross_pay(hours, self._employee.pay_rate)

    def _updated_record(self, now: datetime) -> ShiftRecord:
        d = self._draft
        clock_in = d.effective_clock_in()
        clock_out = d.effective_clock_out()

        if clock_out is None:
            hours, pay = Decimal("0.00"), Decimal("0.00")
        else:
            hours, pay = self._totals(clock_in, clock_out)

        audit = self._audit_line(now)
        notes = f"{self._record.notes}{AUDIT_NOTE_SEPARATOR}{audit}" if self._record.notes else audit

        return replace(
            self._record,
            shift_date=clock_in.date(),
            clock_in=clock_in.time(),
            clock_out=clock_out.time() if clock_out else None,
            total_hours=hours,
            gross_pay=pay,
            notes=notes,
            is_active=self._record.is_active if clock_out is None else False,
        )

    def _audit_line(self, now: datetime) -> str:
        d = self._draft
        changes = "".join(
            f"{_LABELS[field]}: {_stamp(d.original(field))} -> {_stamp(d.proposed(field))}; "
            for field in (CorrectionField.CLOCK_IN, CorrectionField.CLOCK_OUT)
            if d.is_enabled(field)
        )
        reason = " ".join(d.reason.split())
        return f"MANAGER CORRECTION: {now:%Y-%m-%d %H:%M} - {changes}Reason: {reason}"


def _stamp(value: Optional[datetime]) -> str:
    if value is None:
        return "none"
    return f"{value:%m/%d/%Y} {format_12_hour(value)}"
