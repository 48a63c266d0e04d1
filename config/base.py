import os

# Shared engine policy; every value can be overridden from the environment.
LUNCH_THRESHOLD_HOURS = float(os.getenv("LUNCH_THRESHOLD_HOURS", "6"))
LUNCH_DURATION_MINUTES = float(os.getenv("LUNCH_DURATION_MINUTES", "30"))

BUSINESS_HOURS_START = os.getenv("BUSINESS_HOURS_START", "06:00")
BUSINESS_HOURS_END = os.getenv("BUSINESS_HOURS_END", "22:00")
RESTRICTED_HOURS_START = os.getenv("RESTRICTED_HOURS_START", "02:00")
RESTRICTED_HOURS_END = os.getenv("RESTRICTED_HOURS_END", "05:00")
ROUNDING_INTERVAL_MINUTES = int(os.getenv("ROUNDING_INTERVAL_MINUTES", "15"))

SIMPLE_REASON_MIN_LENGTH = int(os.getenv("SIMPLE_REASON_MIN_LENGTH", "10"))
TEMPLATED_REASON_MIN_LENGTH = int(os.getenv("TEMPLATED_REASON_MIN_LENGTH", "3"))
MAX_SHIFT_HOURS = float(os.getenv("MAX_SHIFT_HOURS", "24"))

# Live punch checks
CLOCK_IN_COOLDOWN_HOURS = float(os.getenv("CLOCK_IN_COOLDOWN_HOURS", "4"))
MIN_WORK_MINUTES = float(os.getenv("MIN_WORK_MINUTES", "1"))
PUNCH_MAX_SHIFT_HOURS = float(os.getenv("PUNCH_MAX_SHIFT_HOURS", "16"))
