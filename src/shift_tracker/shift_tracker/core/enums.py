from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used for authorization of correction endpoints."""

    MANAGER = "manager"
    EMPLOYEE = "employee"


class CorrectionField(str, Enum):
    """The two independently correctable sides of a shift record."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class CorrectionState(str, Enum):
    """Lifecycle of one correction session."""

    DRAFT = "DRAFT"
    EDITING = "EDITING"
    APPLIED = "APPLIED"
    CANCELLED = "CANCELLED"


class CorrectionRule(str, Enum):
    """Validation rules of a correction draft, in evaluation order."""

    NOTHING_SELECTED = "NOTHING_SELECTED"
    REASON = "REASON"
    MISSING_TIME = "MISSING_TIME"
    FUTURE_TIME = "FUTURE_TIME"
    ORDER = "ORDER"
    NON_POSITIVE_TOTAL = "NON_POSITIVE_TOTAL"
    MAX_DURATION = "MAX_DURATION"
    SPANS_DAY = "SPANS_DAY"


class PunchRule(str, Enum):
    """Checks made before recording a live clock-in or clock-out."""

    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    EMPLOYEE_INACTIVE = "EMPLOYEE_INACTIVE"
    ALREADY_CLOCKED_IN = "ALREADY_CLOCKED_IN"
    COOLDOWN = "COOLDOWN"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    MIN_WORK_TIME = "MIN_WORK_TIME"
    MAX_SHIFT = "MAX_SHIFT"
