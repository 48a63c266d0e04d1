from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

import pytest

from src.shift_tracker.shift_tracker.database.mysql_base import normalize_mysql_time
from src.shift_tracker.shift_tracker.employees.mysql_employee_repository import MySQLEmployeeRepository
from src.shift_tracker.shift_tracker.shifts.model import ShiftRecord
from src.shift_tracker.shift_tracker.shifts.mysql_shift_record_store import MySQLShiftRecordStore


class FakeCursor:
    def __init__(self, row=None, rowcount=1, error=None):
        self.row = row
        self.rowcount = rowcount
        self.error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params):
        self.executed.append((sql, params))
        if self.error:
            raise self.error

    def fetchone(self):
        return self.row

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, cursor):
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def test_get_by_id_maps_row():
    cursor = FakeCursor(
        row={
            "entry_id": 4,
            "employee_id": 9,
            "shift_date": date(2026, 2, 1),
            "time_in": timedelta(hours=22),
            "time_out": timedelta(hours=6, minutes=15),
            "total_hours": Decimal("7.75"),
            "gross_pay": 155.0,
            "notes": None,
            "is_active": 0,
        }
    )
    store = MySQLShiftRecordStore(FakeConnectionFactory(cursor))

    record = store.get_by_id(4)

    assert record.clock_in == time(22, 0)
    assert record.clock_out == time(6, 15)
    assert record.gross_pay == Decimal("155.0")
    assert record.notes == ""
    assert record.is_active is False
    assert cursor.executed[0][1] == (4,)


def test_get_by_id_missing_row():
    store = MySQLShiftRecordStore(FakeConnectionFactory(FakeCursor(row=None)))
    assert store.get_by_id(1) is None


def test_update_commits_full_record():
    cursor = FakeCursor(rowcount=1)
    factory = FakeConnectionFactory(cursor)
    store = MySQLShiftRecordStore(factory)
    record = ShiftRecord(record_id=4, employee_id=9, shift_date=date(2026, 2, 1), clock_in=time(9, 0), clock_out=time(17, 0))

    assert store.update(record) is True
    params = cursor.executed[0][1]
    assert params[0] == date(2026, 2, 1)
    assert params[-1] == 4
    assert factory.conn.committed and factory.conn.closed and cursor.closed


def test_update_reports_missing_row():
    store = MySQLShiftRecordStore(FakeConnectionFactory(FakeCursor(rowcount=0)))
    record = ShiftRecord(record_id=4, employee_id=9, shift_date=date(2026, 2, 1), clock_in=time(9, 0))
    assert store.update(record) is False


def test_update_rolls_back_on_error():
    factory = FakeConnectionFactory(FakeCursor(error=RuntimeError("lock wait timeout")))
    store = MySQLShiftRecordStore(factory)
    record = ShiftRecord(record_id=4, employee_id=9, shift_date=date(2026, 2, 1), clock_in=time(9, 0))

    with pytest.raises(RuntimeError):
        store.update(record)
    assert factory.conn.rolled_back and not factory.conn.committed


def test_employee_repository_builds_display_name():
    cursor = FakeCursor(row={"employee_id": 9, "first_name": "Ann", "last_name": "Lee", "pay_rate": Decimal("21.50")})
    employee = MySQLEmployeeRepository(FakeConnectionFactory(cursor)).get_by_id(9)

    assert employee.display_name == "Ann Lee"
    assert employee.pay_rate == Decimal("21.50")


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=8, minutes=30, seconds=5), time(8, 30, 5)),
        ("17:45:00", time(17, 45)),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_open_entry_lookup_filters_on_missing_clock_out():
    cursor = FakeCursor(
        row={"entry_id": 7, "employee_id": 9, "shift_date": date(2026, 2, 2), "time_in": timedelta(hours=8), "time_out": None}
    )
    record = MySQLShiftRecordStore(FakeConnectionFactory(cursor)).get_open_for_employee(9)

    sql, params = cursor.executed[0]
    assert "time_out IS NULL" in sql
    assert params == (9,)
    assert record.clock_out is None
    assert record.total_hours == Decimal("0.00")


def test_last_completed_lookup_orders_by_clock_out():
    store = MySQLShiftRecordStore(FakeConnectionFactory(FakeCursor(row=None)))
    assert store.get_last_completed_for_employee(9) is None

    cursor = FakeCursor(row=None)
    MySQLShiftRecordStore(FakeConnectionFactory(cursor)).get_last_completed_for_employee(9)
    sql = cursor.executed[0][0]
    assert "time_out IS NOT NULL" in sql
    assert "ORDER BY shift_date DESC, time_out DESC" in sql


def test_employee_repository_reads_active_flag():
    cursor = FakeCursor(row={"employee_id": 9, "first_name": "Ann", "last_name": "Lee", "pay_rate": 20, "active": 0})
    assert MySQLEmployeeRepository(FakeConnectionFactory(cursor)).get_by_id(9).active is False
