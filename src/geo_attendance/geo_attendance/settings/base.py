"""Options shared by every environment. All values can be set from the environment."""

import os

from ..core import constants as c

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

# Office geofence
OFFICE_LAT = float(os.getenv("OFFICE_LAT", str(c.DEFAULT_OFFICE_LAT)))
OFFICE_LNG = float(os.getenv("OFFICE_LNG", str(c.DEFAULT_OFFICE_LNG)))
GEOFENCE_RADIUS_METERS = float(os.getenv("GEOFENCE_RADIUS_METERS", str(c.DEFAULT_GEOFENCE_RADIUS_METERS)))

# Punctuality
OFFICE_START_HOUR = int(os.getenv("OFFICE_START_HOUR", str(c.DEFAULT_OFFICE_START_HOUR)))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", str(c.DEFAULT_LATE_GRACE_MINUTES)))

# Payroll
PAYROLL_DAYS_PER_MONTH = int(os.getenv("PAYROLL_DAYS_PER_MONTH", str(c.DEFAULT_PAYROLL_DAYS_PER_MONTH)))
PROFESSIONAL_TAX = float(os.getenv("PROFESSIONAL_TAX", str(c.DEFAULT_PROFESSIONAL_TAX)))
TDS_THRESHOLD = float(os.getenv("TDS_THRESHOLD", str(c.DEFAULT_TDS_THRESHOLD)))
TDS_RATE = float(os.getenv("TDS_RATE", str(c.DEFAULT_TDS_RATE)))
BASIC_PCT = float(os.getenv("BASIC_PCT", str(c.DEFAULT_BASIC_PCT)))
HRA_PCT = float(os.getenv("HRA_PCT", str(c.DEFAULT_HRA_PCT)))
DA_PCT = float(os.getenv("DA_PCT", str(c.DEFAULT_DA_PCT)))
