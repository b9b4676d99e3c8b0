"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Period, Role

HOURS_PER_WORKING_DAY = 8

# Working days assumed per period when computing expected hours.
WORKING_DAYS_PER_PERIOD = {
    Period.TODAY: 1,
    Period.WEEKLY: 5,
    Period.MONTHLY: 20,
    Period.YEARLY: 240,
}

HR_ROLES = frozenset({Role.HR, Role.ADMIN})

INTERNAL_ERROR_MESSAGE = "Internal server error"
ATTENDANCE_ERROR_MESSAGE = "Failed to retrieve attendance data"
