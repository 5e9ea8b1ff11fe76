from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from . import constants as c
from .exceptions import ValidationError


@dataclass(frozen=True)
class AttendancePolicy:
    """Office geofence and punctuality rules."""

    office_lat: float = c.DEFAULT_OFFICE_LAT
    office_lng: float = c.DEFAULT_OFFICE_LNG
    geofence_radius_meters: float = c.DEFAULT_GEOFENCE_RADIUS_METERS
    office_start_hour: int = c.DEFAULT_OFFICE_START_HOUR
    late_grace_minutes: int = c.DEFAULT_LATE_GRACE_MINUTES

    def __post_init__(self) -> None:
        if not 0 <= int(self.office_start_hour) <= 23:
            raise ValidationError("office_start_hour must be within 0..23")
        # The deadline is start_hour:grace, so grace has to fit in one hour.
        if not 0 <= int(self.late_grace_minutes) <= 59:
            raise ValidationError("late_grace_minutes must be within 0..59")
        if float(self.geofence_radius_meters) < 0:
            raise ValidationError("geofence_radius_meters must be >= 0")

    def minutes_late(self, when: datetime) -> int:
        """Whole minutes past the grace deadline on the day of `when`; <= 0 when on time."""
        deadline = when.replace(
            hour=int(self.office_start_hour),
            minute=int(self.late_grace_minutes),
            second=0,
            microsecond=0,
        )
        return int((when - deadline).total_seconds() // 60)

    @classmethod
    def from_settings(cls, settings: Any) -> "AttendancePolicy":
        return cls(
            office_lat=float(getattr(settings, "OFFICE_LAT", c.DEFAULT_OFFICE_LAT)),
            office_lng=float(getattr(settings, "OFFICE_LNG", c.DEFAULT_OFFICE_LNG)),
            geofence_radius_meters=float(getattr(settings, "GEOFENCE_RADIUS_METERS", c.DEFAULT_GEOFENCE_RADIUS_METERS)),
            office_start_hour=int(getattr(settings, "OFFICE_START_HOUR", c.DEFAULT_OFFICE_START_HOUR)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", c.DEFAULT_LATE_GRACE_MINUTES)),
        )


@dataclass(frozen=True)
class PayrollPolicy:
    """Salary decomposition table and deduction rules."""

    days_per_month: int = c.DEFAULT_PAYROLL_DAYS_PER_MONTH
    professional_tax: float = c.DEFAULT_PROFESSIONAL_TAX
    tds_threshold: float = c.DEFAULT_TDS_THRESHOLD
    tds_rate: float = c.DEFAULT_TDS_RATE
    basic_pct: float = c.DEFAULT_BASIC_PCT
    hra_pct: float = c.DEFAULT_HRA_PCT
    da_pct: float = c.DEFAULT_DA_PCT

    def __post_init__(self) -> None:
        if int(self.days_per_month) <= 0:
            raise ValidationError("days_per_month must be > 0")
        split = float(self.basic_pct) + float(self.hra_pct) + float(self.da_pct)
        if not math.isclose(split, 1.0, abs_tol=1e-9):
            raise ValidationError(f"basic/hra/da split must sum to 1.0 (got {split})")
        if not 0 <= float(self.tds_rate) <= 1:
            raise ValidationError("tds_rate must be within 0..1")

    @classmethod
    def from_settings(cls, settings: Any) -> "PayrollPolicy":
        return cls(
            days_per_month=int(getattr(settings, "PAYROLL_DAYS_PER_MONTH", c.DEFAULT_PAYROLL_DAYS_PER_MONTH)),
            professional_tax=float(getattr(settings, "PROFESSIONAL_TAX", c.DEFAULT_PROFESSIONAL_TAX)),
            tds_threshold=float(getattr(settings, "TDS_THRESHOLD", c.DEFAULT_TDS_THRESHOLD)),
            tds_rate=float(getattr(settings, "TDS_RATE", c.DEFAULT_TDS_RATE)),
            basic_pct=float(getattr(settings, "BASIC_PCT", c.DEFAULT_BASIC_PCT)),
            hra_pct=float(getattr(settings, "HRA_PCT", c.DEFAULT_HRA_PCT)),
            da_pct=float(getattr(settings, "DA_PCT", c.DEFAULT_DA_PCT)),
        )
