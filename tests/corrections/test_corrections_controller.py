from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest
from flask import Flask

from src.shift_tracker.shift_tracker.container import build_services
from src.shift_tracker.shift_tracker.corrections.controller import register
from src.shift_tracker.shift_tracker.employees.model import Employee
from src.shift_tracker.shift_tracker.shifts.model import ShiftRecord

NOW = datetime(2026, 2, 2, 10, 0)


class InMemoryShiftRecords:
    def __init__(self, record: ShiftRecord, ack: bool = True):
        self.record = record
        self.ack = ack

    def get_by_id(self, record_id):
        return self.record if record_id == self.record.record_id else None

    def get_open_for_employee(self, employee_id):
        r = self.record
        return r if r.employee_id == employee_id and r.clock_out is None else None

    def get_last_completed_for_employee(self, employee_id):
        r = self.record
        return r if r.employee_id == employee_id and r.clock_out is not None else None

    def update(self, record):
        if self.ack:
            self.record = record
        return self.ack


class InMemoryEmployees:
    def get_by_id(self, employee_id):
        return Employee(employee_id=employee_id, display_name="Sam Roe", pay_rate=Decimal("20.00"))


def make_client(ack: bool = True):
    records = InMemoryShiftRecords(
        ShiftRecord(record_id=5, employee_id=3, shift_date=date(2026, 2, 1), clock_in=time(9, 0), clock_out=time(17, 0)),
        ack=ack,
    )
    container = build_services(shift_records_repo=records, employees_repo=InMemoryEmployees(), clock=lambda: NOW)
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register(app, container)
    return app.test_client(), records


def login_manager(client):
    with client.session_transaction() as sess:
        sess["role"] = "manager"
        sess["name"] = "Dana"


def test_format_endpoint():
    client, _ = make_client()

    resp = client.post("/api/time/format", json={"input": "830p"})
    assert resp.get_json() == {"formatted": "8:30 PM", "valid": True}

    resp = client.post("/api/time/format", json={"input": "99"})
    assert resp.get_json() == {"formatted": "99", "valid": False}


def test_hours_endpoint_wraps_midnight():
    client, _ = make_client()

    resp = client.post("/api/time/hours", json={"clock_in": "10p", "clock_out": "6a"})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["clock_in"] == "10:00 PM"
    assert body["hours"] == 7.5


def test_hours_endpoint_rejects_bad_time():
    client, _ = make_client()
    resp = client.post("/api/time/hours", json={"clock_in": "99", "clock_out": "5p"})
    assert resp.status_code == 422


def test_check_endpoint_reports_policies():
    client, _ = make_client()

    body = client.post("/api/time/check", json={"time": "0308"}).get_json()

    assert body["time"] == "3:08 AM"
    assert body["within_business_hours"] is False
    assert body["outside_restricted_hours"] is False
    assert body["rounded"] == "3:15 AM"


def test_corrections_require_manager_session():
    client, _ = make_client()
    resp = client.post("/api/shifts/5/corrections", json={})
    assert resp.status_code == 403


def test_correction_applied():
    client, records = make_client()
    login_manager(client)

    resp = client.post(
        "/api/shifts/5/corrections",
        json={"reason": "Forgot to clock out", "clock_out": "2026-02-01T18:00"},
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["ok"] is True
    assert body["clock_out"] == "6:00 PM"
    assert body["total_hours"] == "8.50"
    assert body["gross_pay"] == "170.00"
    assert records.record.clock_out == time(18, 0)
    assert "Manager Name: Dana" in records.record.notes


def test_correction_validation_error_is_422():
    client, records = make_client()
    login_manager(client)

    resp = client.post(
        "/api/shifts/5/corrections",
        json={"reason": "Wrong punch", "clock_out": "2026-02-01T08:00"},
    )

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "Clock-out time must be after clock-in time."
    assert records.record.clock_out == time(17, 0)


@pytest.mark.parametrize("payload", [{"clock_out": "tomorrow"}, {"mode": "bulk", "clock_out": "2026-02-01T18:00"}])
def test_correction_bad_request_is_422(payload):
    client, _ = make_client()
    login_manager(client)
    resp = client.post("/api/shifts/5/corrections", json={"reason": "Forgot", **payload})
    assert resp.status_code == 422


def test_correction_unknown_record_is_404():
    client, _ = make_client()
    login_manager(client)
    resp = client.post("/api/shifts/404/corrections", json={"reason": "x", "clock_out": "2026-02-01T18:00"})
    assert resp.status_code == 404


def test_store_rejection_is_reported():
    client, records = make_client(ack=False)
    login_manager(client)

    resp = client.post(
        "/api/shifts/5/corrections",
        json={"reason": "Forgot to clock out", "clock_out": "2026-02-01T18:00"},
    )

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "Failed to apply corrections. Please try again."
    assert records.record.notes == ""


def test_punch_check_endpoint():
    client, _ = make_client()

    assert client.get("/api/employees/3/punch-check?action=clock_in").get_json() == {"ok": True}

    body = client.get("/api/employees/3/punch-check?action=clock_out").get_json()
    assert body == {"ok": False, "rule": "NOT_CLOCKED_IN", "error": "Sam Roe is not currently clocked in."}

    assert client.get("/api/employees/3/punch-check?action=lunch").status_code == 400
