"""Example: time entry helpers and the payroll calculator without Flask or MySQL."""

from datetime import datetime
from decimal import Decimal

from src.shift_tracker.shift_tracker.policies.business_hours import BusinessHoursPolicy, round_to_nearest_interval
from src.shift_tracker.shift_tracker.payroll.calculator.base import to_hours_decimal
from src.shift_tracker.shift_tracker.payroll.calculator.lunch_deduction import LunchDeductionCalculator
from src.shift_tracker.shift_tracker.timeinput.parser import format_time_input, parse_time_of_day
from src.shift_tracker.shift_tracker.common.datetime_utils import parse_hhmm


def main():
    for raw in ("9", "130p", "1745", "0a"):
        print(f"{raw!r:>8} -> {format_time_input(raw)}")

    clock_in = parse_time_of_day(format_time_input("8a"))
    clock_out = parse_time_of_day(format_time_input("5p"))
    calculator = LunchDeductionCalculator()
    hours = to_hours_decimal(calculator.worked_hours_for_times(clock_in, clock_out))
    print("hours:", hours, "pay at 18.50:", calculator.gross_pay(hours, Decimal("18.50")))

    policy = BusinessHoursPolicy(start=parse_hhmm("06:00"), end=parse_hhmm("22:00"))
    punch = datetime(2026, 2, 2, 22, 7)
    print("allowed:", policy.allows(punch), "rounded:", round_to_nearest_interval(punch, 15))


if __name__ == "__main__":
    main()
