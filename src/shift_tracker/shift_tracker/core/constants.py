"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LUNCH_THRESHOLD_HOURS = 6
DEFAULT_LUNCH_DURATION_MINUTES = 30

DEFAULT_BUSINESS_HOURS_START = "06:00"
DEFAULT_BUSINESS_HOURS_END = "22:00"
DEFAULT_RESTRICTED_HOURS_START = "02:00"
DEFAULT_RESTRICTED_HOURS_END = "05:00"
DEFAULT_ROUNDING_INTERVAL_MINUTES = 15

DEFAULT_SIMPLE_REASON_MIN_LENGTH = 10
DEFAULT_TEMPLATED_REASON_MIN_LENGTH = 3
DEFAULT_MAX_SHIFT_HOURS = 24

REASON_MARKER = "Reason:"
AUDIT_NOTE_SEPARATOR = " | "

DEFAULT_CLOCK_IN_COOLDOWN_HOURS = 4
DEFAULT_MIN_WORK_MINUTES = 1
DEFAULT_PUNCH_MAX_SHIFT_HOURS = 16
DEFAULT_EXTENDED_SHIFT_HOURS = 12
