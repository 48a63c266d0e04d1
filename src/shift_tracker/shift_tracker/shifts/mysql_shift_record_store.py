from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time, to_decimal
from .model import ShiftRecord
from .repository import ShiftRecordStore

logger = logging.getLogger(__name__)

_SELECT = """
    SELECT entry_id, employee_id, shift_date, time_in, time_out,
           total_hours, gross_pay, notes, is_active
    FROM time_entries
"""


def _to_record(r: Dict[str, Any]) -> ShiftRecord:
    return ShiftRecord(
        record_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        shift_date=r["shift_date"],
        clock_in=normalize_mysql_time(r["time_in"]),
        clock_out=normalize_mysql_time(r.get("time_out")),
        total_hours=to_decimal(r.get("total_hours")),
        gross_pay=to_decimal(r.get("gross_pay")),
        notes=r.get("notes") or "",
        is_active=bool(r.get("is_active")),
    )


class MySQLShiftRecordStore(ShiftRecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch_one(self, where: str, params: tuple) -> Optional[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where, params)
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, record_id: int) -> Optional[ShiftRecord]:
        return self._fetch_one("WHERE entry_id=%s", (int(record_id),))

    def get_open_for_employee(self, employee_id: int) -> Optional[ShiftRecord]:
        return self._fetch_one(
            """
            WHERE employee_id=%s AND time_in IS NOT NULL AND time_out IS NULL
            ORDER BY shift_date DESC, time_in DESC
            LIMIT 1
            """,
            (int(employee_id),),
        )

    def get_last_completed_for_employee(self, employee_id: int) -> Optional[ShiftRecord]:
        return self._fetch_one(
            """
            WHERE employee_id=%s AND time_in IS NOT NULL AND time_out IS NOT NULL
            ORDER BY shift_date DESC, time_out DESC
            LIMIT 1
            """,
            (int(employee_id),),
        )

    def update(self, record: ShiftRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET shift_date=%s, time_in=%s, time_out=%s, total_hours=%s,
                    gross_pay=%s, notes=%s, is_active=%s, modified_date=%s
                WHERE entry_id=%s
                """,
                (
                    record.shift_date,
                    record.clock_in,
                    record.clock_out,
                    record.total_hours,
                    record.gross_pay,
                    record.notes,
                    int(record.is_active),
                    now_local(),
                    int(record.record_id),
                ),
            )
            updated = cur.rowcount == 1
        if not updated:
            logger.warning("Time entry %s was not updated", record.record_id)
        return updated
