"""Smart parsing of terse time entry.

Clerks type times the quickest way they can ("8", "830p", "1430"). These
helpers turn such input into the canonical ``H:MM AM|PM`` display string and
back into a ``datetime.time`` for calculations.

Formatting is fail-soft: anything that cannot be interpreted is echoed back
unchanged so the input box keeps what the user typed.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Optional

FORMAT_EXAMPLES = "Examples: 8, 830, 8:30, 8:30 AM, 1430, 2:30 PM"

# Accepted by the permissive parse of already formatted text.
_FORMATTED_PATTERNS = (
    "%I:%M %p",
    "%I:%M%p",
    "%I:%M:%S %p",
    "%I %p",
    "%I%p",
    "%H:%M",
    "%H:%M:%S",
)


def format_time_input(raw: Optional[str]) -> str:
    """Convert free-text time entry to ``H:MM AM|PM``.

    "8" -> "8:00 AM", "1430" -> "2:30 PM", "830p" -> "8:30 PM".
    Returns the original input when it cannot be interpreted.
    """
    if raw is None or not raw.strip():
        return ""

    clean = raw.strip().upper()
    has_meridiem = "A" in clean or "P" in clean
    is_pm = "P" in clean

    digits = "".join(ch for ch in clean if ch.isdigit())
    if not digits:
        return raw

    split = _split_digits(digits)
    if split is None:
        return raw
    hour, minute = split

    if hour < 0 or hour > 23 or minute < 0 or minute > 59:
        return raw

    if has_meridiem:
        return _format_stated_meridiem(hour, minute, is_pm)
    return _format_guessed_meridiem(hour, minute)


def _split_digits(digits: str) -> Optional[tuple[int, int]]:
    if len(digits) in (1, 2):
        return int(digits), 0
    if len(digits) == 3:
        return int(digits[0]), int(digits[1:])
    if len(digits) == 4:
        return int(digits[:2]), int(digits[2:])
    return None


def _format_stated_meridiem(hour: int, minute: int, is_pm: bool) -> str:
    if hour == 0:
        return f"12:{minute:02d} AM"
    if hour <= 12:
        return f"{hour}:{minute:02d} {'PM' if is_pm else 'AM'}"
    # A 24-hour value wins over whatever meridiem was typed.
    return f"{hour - 12}:{minute:02d} PM"


def _format_guessed_meridiem(hour: int, minute: int) -> str:
    """Business-shift heuristic for input without AM/PM.

    1-5 are read as early-morning overnight punches, 6-7 as evening
    clock-outs, 8-11 as morning clock-ins.
    """
    if hour == 0:
        return f"12:{minute:02d} AM"
    if 1 <= hour <= 5:
        return f"{hour}:{minute:02d} AM"
    if 6 <= hour <= 7:
        return f"{hour}:{minute:02d} PM"
    if 8 <= hour <= 11:
        return f"{hour}:{minute:02d} AM"
    if hour == 12:
        return f"12:{minute:02d} PM"
    return f"{hour - 12}:{minute:02d} PM"


def parse_time_of_day(text: Optional[str]) -> Optional[time]:
    """Convert formatted text ("8:30 AM", "14:30") to a time-of-day."""
    if text is None or not text.strip():
        return None

    value = " ".join(text.strip().upper().split())
    for pattern in _FORMATTED_PATTERNS:
        try:
            return datetime.strptime(value, pattern).time()
        except ValueError:
            continue
    return None


def is_valid_time_format(text: Optional[str]) -> bool:
    return parse_time_of_day(text) is not None


def format_12_hour(value: time | datetime) -> str:
    """Canonical display of a time-of-day, no leading zero on the hour."""
    hour = value.hour % 12 or 12
    meridiem = "PM" if value.hour >= 12 else "AM"
    return f"{hour}:{value.minute:02d} {meridiem}"
