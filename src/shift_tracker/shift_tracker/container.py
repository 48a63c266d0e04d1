from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from .common.datetime_utils import now_local, parse_hhmm
from .core import constants
from .corrections.factory import CorrectionWorkflowFactory
from .corrections.service import CorrectionService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.calculator.lunch_deduction import LunchDeductionCalculator
from .policies.business_hours import BusinessHoursPolicy, RestrictedHoursPolicy
from .policies.punch_validation import PunchPolicy
from .shifts.mysql_shift_record_store import MySQLShiftRecordStore
from .shifts.repository import ShiftRecordStore


@dataclass(frozen=True)
class Container:
    shift_records_repo: ShiftRecordStore
    employees_repo: EmployeeRepository

    calculator: LunchDeductionCalculator
    business_hours: BusinessHoursPolicy
    restricted_hours: RestrictedHoursPolicy
    rounding_interval_minutes: int
    punch_policy: PunchPolicy

    correction_factory: CorrectionWorkflowFactory
    correction_service: CorrectionService


def _setting(settings: Any, name: str, default):
    return getattr(settings, name, default) if settings is not None else default


def build_services(
    *,
    shift_records_repo: ShiftRecordStore,
    employees_repo: EmployeeRepository,
    settings: Any = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire policies and services around the given repositories."""

    calculator = LunchDeductionCalculator(
        lunch_threshold=timedelta(hours=float(_setting(settings, "LUNCH_THRESHOLD_HOURS", constants.DEFAULT_LUNCH_THRESHOLD_HOURS))),
        lunch_duration=timedelta(minutes=float(_setting(settings, "LUNCH_DURATION_MINUTES", constants.DEFAULT_LUNCH_DURATION_MINUTES))),
    )
    business_hours = BusinessHoursPolicy(
        start=parse_hhmm(_setting(settings, "BUSINESS_HOURS_START", constants.DEFAULT_BUSINESS_HOURS_START)),
        end=parse_hhmm(_setting(settings, "BUSINESS_HOURS_END", constants.DEFAULT_BUSINESS_HOURS_END)),
    )
    restricted_hours = RestrictedHoursPolicy(
        start=parse_hhmm(_setting(settings, "RESTRICTED_HOURS_START", constants.DEFAULT_RESTRICTED_HOURS_START)),
        end=parse_hhmm(_setting(settings, "RESTRICTED_HOURS_END", constants.DEFAULT_RESTRICTED_HOURS_END)),
    )

    punch_policy = PunchPolicy(
        records=shift_records_repo,
        employees=employees_repo,
        clock=clock,
        cooldown=timedelta(hours=float(_setting(settings, "CLOCK_IN_COOLDOWN_HOURS", constants.DEFAULT_CLOCK_IN_COOLDOWN_HOURS))),
        min_work_time=timedelta(minutes=float(_setting(settings, "MIN_WORK_MINUTES", constants.DEFAULT_MIN_WORK_MINUTES))),
        max_shift=timedelta(hours=float(_setting(settings, "PUNCH_MAX_SHIFT_HOURS", constants.DEFAULT_PUNCH_MAX_SHIFT_HOURS))),
    )

    max_shift_hours: Optional[float] = _setting(settings, "MAX_SHIFT_HOURS", constants.DEFAULT_MAX_SHIFT_HOURS)
    correction_factory = CorrectionWorkflowFactory(
        store=shift_records_repo,
        calculator=calculator,
        clock=clock,
        simple_reason_min_length=int(_setting(settings, "SIMPLE_REASON_MIN_LENGTH", constants.DEFAULT_SIMPLE_REASON_MIN_LENGTH)),
        templated_reason_min_length=int(
            _setting(settings, "TEMPLATED_REASON_MIN_LENGTH", constants.DEFAULT_TEMPLATED_REASON_MIN_LENGTH)
        ),
        max_shift_hours=float(max_shift_hours) if max_shift_hours is not None else None,
    )

    return Container(
        shift_records_repo=shift_records_repo,
        employees_repo=employees_repo,
        calculator=calculator,
        business_hours=business_hours,
        restricted_hours=restricted_hours,
        rounding_interval_minutes=int(
            _setting(settings, "ROUNDING_INTERVAL_MINUTES", constants.DEFAULT_ROUNDING_INTERVAL_MINUTES)
        ),
        punch_policy=punch_policy,
        correction_factory=correction_factory,
        correction_service=CorrectionService(shift_records_repo, employees_repo, correction_factory),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        shift_records_repo=MySQLShiftRecordStore(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        settings=settings,
    )
