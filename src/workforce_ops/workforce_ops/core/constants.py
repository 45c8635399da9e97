"""Constants and defaults.

Classification cut-offs, geofence radius and accepted period ranges.
"""

# Daily classification cut-offs (hours)
FULL_HOURS = 9
UNDERWORK_HOURS = 7
HALF_HOURS = 4

# Check-in at or after this hour is a late-in; check-out before this hour is an early-out
LATE_IN_HOUR = 11
EARLY_OUT_HOUR = 17

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_GEOFENCE_RADIUS_METERS = 50

PAYROLL_MIN_YEAR = 2020
PAYROLL_MAX_YEAR = 2030
CALENDAR_MIN_YEAR = 2000
CALENDAR_MAX_YEAR = 2100

DEFAULT_PAYROLL_HISTORY_LIMIT = 24

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0

# users.salary_amount is DECIMAL(12, 2)
MAX_SALARY_AMOUNT = 9_999_999_999.99
