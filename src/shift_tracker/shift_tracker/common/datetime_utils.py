from __future__ import annotations

from datetime import datetime, time


def parse_iso_datetime(value: str) -> datetime:
    """Parse YYYY-MM-DDTHH:MM (seconds optional) into a naive local datetime."""
    v = value.strip().replace(" ", "T")
    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M"):
        try:
            return datetime.strptime(v, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid datetime: {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (24-hour) string into time; used for settings values."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def time_of_day(value: time | datetime) -> time:
    if isinstance(value, datetime):
        return value.time()
    return value


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
