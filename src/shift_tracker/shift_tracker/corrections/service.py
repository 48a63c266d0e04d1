from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import CorrectionField, Role
from ..core.exceptions import AuthorizationError, RecordNotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRecordStore
from .factory import CorrectionWorkflowFactory
from .model import ApplyResult
from .workflow import CorrectionWorkflow

MODE_DUAL = "dual"
MODE_CLOCK_OUT_ONLY = "clock_out_only"


class CorrectionService:
    def __init__(self, records: ShiftRecordStore, employees: EmployeeRepository, factory: CorrectionWorkflowFactory):
        self._records = records
        self._employees = employees
        self._factory = factory

    def open_session(
        self,
        *,
        current_role: Role,
        record_id: int,
        manager: str,
        mode: str = MODE_DUAL,
    ) -> CorrectionWorkflow:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can correct time entries")

        manager = require_non_empty(manager, "Manager")

        record = self._records.get_by_id(int(record_id))
        if not record:
            raise RecordNotFoundError("Time entry not found")

        employee = self._employees.get_by_id(record.employee_id)
        if not employee:
            raise RecordNotFoundError("Employee not found")

        if mode == MODE_DUAL:
            return self._factory.dual(record, employee, manager=manager)
        if mode == MODE_CLOCK_OUT_ONLY:
            return self._factory.clock_out_only(record, employee, manager=manager)
        raise ValidationError(f"Unknown correction mode: {mode}")

    def apply_correction(
        self,
        *,
        current_role: Role,
        record_id: int,
        manager: str,
        reason: str,
        clock_in: Optional[datetime] = None,
        clock_out: Optional[datetime] = None,
        mode: str = MODE_DUAL,
    ) -> ApplyResult:
        """Open a session, fill it from one request and apply it."""
        workflow = self.open_session(current_role=current_role, record_id=record_id, manager=manager, mode=mode)

        if clock_in is not None:
            workflow.enable_field(CorrectionField.CLOCK_IN)
            workflow.set_proposed_time(CorrectionField.CLOCK_IN, clock_in)
        if clock_out is not None:
            workflow.enable_field(CorrectionField.CLOCK_OUT)
            workflow.set_proposed_time(CorrectionField.CLOCK_OUT, clock_out)

        # The dual session prefills a template; the free text goes after it.
        workflow.set_reason(workflow.draft.reason + (reason or "").strip())
        return workflow.apply()
