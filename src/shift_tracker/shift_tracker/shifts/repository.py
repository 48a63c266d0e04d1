from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftRecord


class ShiftRecordStore(Protocol):
    def get_by_id(self, record_id: int) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[ShiftRecord]:
        """Latest entry with a clock-in and no clock-out yet."""

        raise NotImplementedError

    def get_last_completed_for_employee(self, employee_id: int) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def update(self, record: ShiftRecord) -> bool:
        """Atomically replace the full record. True means it was persisted."""

        raise NotImplementedError
