"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 30

# Office geofence (central Bangalore)
DEFAULT_OFFICE_LAT = 12.9716
DEFAULT_OFFICE_LNG = 77.5946
DEFAULT_GEOFENCE_RADIUS_METERS = 2000.0
EARTH_RADIUS_METERS = 6_371_000.0

# Lateness: check-in after OFFICE_START_HOUR:LATE_GRACE_MINUTES is Late
DEFAULT_OFFICE_START_HOUR = 10
DEFAULT_LATE_GRACE_MINUTES = 15

# Payroll
DEFAULT_PAYROLL_DAYS_PER_MONTH = 30
DEFAULT_PROFESSIONAL_TAX = 200.0
DEFAULT_TDS_THRESHOLD = 50_000.0
DEFAULT_TDS_RATE = 0.10
DEFAULT_BASIC_PCT = 0.5
DEFAULT_HRA_PCT = 0.4
DEFAULT_DA_PCT = 0.1

DEFAULT_CORRECTION_REASON = "Admin Correction"
