from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_datetime
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, RecordNotFoundError, ValidationError
from ..policies.business_hours import round_to_nearest_interval
from ..timeinput.parser import FORMAT_EXAMPLES, format_12_hour, format_time_input, is_valid_time_format, parse_time_of_day
from .service import MODE_DUAL

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def manager_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if session.get("role") != Role.MANAGER.value:
                return jsonify({"ok": False, "error": "Manager authorization required"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _time_field(data: dict, name: str):
        value = parse_time_of_day(format_time_input(str(data.get(name) or "")))
        if value is None:
            raise ValidationError(f"Invalid time for {name}. {FORMAT_EXAMPLES}")
        return value

    def _optional_datetime(data: dict, name: str):
        raw = data.get(name)
        if not raw:
            return None
        try:
            return parse_iso_datetime(str(raw))
        except ValueError:
            raise ValidationError(f"Invalid date/time for {name}")

    @app.route("/api/time/format", methods=["POST"], endpoint="time_format")
    def time_format():
        raw = str(_payload().get("input") or "")
        formatted = format_time_input(raw)
        return jsonify({"formatted": formatted, "valid": is_valid_time_format(formatted)})

    @app.route("/api/time/hours", methods=["POST"], endpoint="time_hours")
    def time_hours():
        data = _payload()
        try:
            clock_in = _time_field(data, "clock_in")
            clock_out = _time_field(data, "clock_out")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 422

        hours = container.calculator.worked_hours_for_times(clock_in, clock_out)
        return jsonify(
            {
                "clock_in": format_12_hour(clock_in),
                "clock_out": format_12_hour(clock_out),
                "hours": round(hours, 2),
            }
        )

    @app.route("/api/time/check", methods=["POST"], endpoint="time_check")
    def time_check():
        try:
            value = _time_field(_payload(), "time")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 422

        rounded = round_to_nearest_interval(value, container.rounding_interval_minutes)
        return jsonify(
            {
                "time": format_12_hour(value),
                "within_business_hours": container.business_hours.allows(value),
                "outside_restricted_hours": container.restricted_hours.allows(value),
                "rounded": format_12_hour(rounded),
            }
        )

    @app.route("/api/employees/<int:employee_id>/punch-check", methods=["GET"], endpoint="punch_check")
    def punch_check(employee_id: int):
        action = request.args.get("action", "clock_in")
        if action == "clock_in":
            found = container.punch_policy.check_clock_in(employee_id)
        elif action == "clock_out":
            found = container.punch_policy.check_clock_out(employee_id)
        else:
            return jsonify({"ok": False, "error": "action must be clock_in or clock_out"}), 400

        if found:
            return jsonify({"ok": False, "rule": found.rule.value, "error": found.message})
        return jsonify({"ok": True})

    @app.route("/api/shifts/<int:record_id>/corrections", methods=["POST"], endpoint="shift_corrections")
    @manager_required
    def shift_corrections(record_id: int):
        data = _payload()
        try:
            result = container.correction_service.apply_correction(
                current_role=Role(session.get("role")),
                record_id=record_id,
                manager=str(data.get("manager") or session.get("name") or ""),
                reason=str(data.get("reason") or ""),
                clock_in=_optional_datetime(data, "clock_in"),
                clock_out=_optional_datetime(data, "clock_out"),
                mode=str(data.get("mode") or MODE_DUAL),
            )
        except AuthorizationError as e:
            return jsonify({"ok": False, "error": str(e)}), 403
        except RecordNotFoundError as e:
            return jsonify({"ok": False, "error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"ok": False, "error": str(e)}), 422
        except Exception:
            logger.exception("Correction request failed for record %s", record_id)
            return jsonify({"ok": False, "error": "System error while applying correction"}), 500

        if not result.success:
            return jsonify({"ok": False, "error": result.message}), 422

        record = result.record
        return jsonify(
            {
                "ok": True,
                "record_id": record.record_id,
                "shift_date": record.shift_date.strftime("%Y-%m-%d"),
                "clock_in": format_12_hour(record.clock_in),
                "clock_out": format_12_hour(record.clock_out) if record.clock_out else None,
                "total_hours": str(record.total_hours),
                "gross_pay": str(record.gross_pay),
                "notes": record.notes,
            }
        )
