"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EMPTY_SLOT = "--:--"
JUSTIFIED_LABEL = "Justified"

WEEKEND_LABELS = {5: "Saturday", 6: "Sunday"}

# Window boundaries are configuration; these are only the fallbacks.
DEFAULT_SCHEDULE_WINDOWS = {
    "morning_in": ("07:40", "08:05"),
    "morning_out": ("12:00", "12:10"),
    "afternoon_in": ("12:50", "13:05"),
    "afternoon_out": ("18:00", "18:10"),
}

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
MIN_EMPLOYEE_AGE = 16
MAX_EMPLOYEE_AGE = 75
