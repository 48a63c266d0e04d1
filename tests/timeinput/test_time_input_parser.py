from datetime import datetime, time

import pytest

from src.shift_tracker.shift_tracker.timeinput.parser import (
    format_12_hour,
    format_time_input,
    is_valid_time_format,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("8", "8:00 AM"),
        ("1430", "2:30 PM"),
        ("830P", "8:30 PM"),
        ("830p", "8:30 PM"),
        ("0830", "8:30 AM"),
        ("  945 ", "9:45 AM"),
        ("8:30", "8:30 AM"),
        ("12", "12:00 PM"),
        ("0", "12:00 AM"),
        ("0015", "12:15 AM"),
    ],
)
def test_formats_common_entries(raw, expected):
    assert format_time_input(raw) == expected


@pytest.mark.parametrize("hour", [1, 2, 3, 4, 5])
def test_early_hours_without_meridiem_are_morning(hour):
    assert format_time_input(str(hour)) == f"{hour}:00 AM"


@pytest.mark.parametrize("hour", [6, 7])
def test_six_and_seven_without_meridiem_are_evening(hour):
    assert format_time_input(str(hour)) == f"{hour}:00 PM"


@pytest.mark.parametrize("hour", [8, 9, 10, 11])
def test_eight_to_eleven_without_meridiem_are_morning(hour):
    assert format_time_input(str(hour)) == f"{hour}:00 AM"


def test_explicit_meridiem_is_respected_for_twelve_hour_values():
    assert format_time_input("6a") == "6:00 AM"
    assert format_time_input("3 PM") == "3:00 PM"
    assert format_time_input("12am") == "12:00 AM"
    assert format_time_input("1205p") == "12:05 PM"


def test_twenty_four_hour_value_overrides_typed_am():
    assert format_time_input("1430 AM") == "2:30 PM"
    assert format_time_input("23a") == "11:00 PM"


def test_explicit_meridiem_with_midnight_hour():
    assert format_time_input("0030 PM") == "12:30 AM"


@pytest.mark.parametrize("raw", ["99", "2460", "875", "12345", "abc", "7:5:3:1:2"])
def test_invalid_input_is_echoed(raw):
    assert format_time_input(raw) == raw


def test_blank_input_returns_empty_string():
    assert format_time_input("") == ""
    assert format_time_input("   ") == ""
    assert format_time_input(None) == ""


@pytest.mark.parametrize("raw", ["8", "830", "1430", "6", "0", "1205", "945p", "23"])
def test_formatting_is_idempotent(raw):
    once = format_time_input(raw)
    assert format_time_input(once) == once


def test_parse_time_of_day_accepts_formatted_text():
    assert parse_time_of_day("8:30 AM") == time(8, 30)
    assert parse_time_of_day("2:30 pm") == time(14, 30)
    assert parse_time_of_day("12:00 AM") == time(0, 0)
    assert parse_time_of_day("14:30") == time(14, 30)
    assert parse_time_of_day("8 PM") == time(20, 0)


def test_parse_time_of_day_rejects_garbage():
    assert parse_time_of_day("99") is None
    assert parse_time_of_day("") is None
    assert parse_time_of_day("25:00") is None
    assert not is_valid_time_format("later")
    assert is_valid_time_format("8:30 AM")


def test_format_12_hour():
    assert format_12_hour(time(0, 5)) == "12:05 AM"
    assert format_12_hour(time(12, 0)) == "12:00 PM"
    assert format_12_hour(datetime(2026, 2, 1, 17, 45)) == "5:45 PM"
