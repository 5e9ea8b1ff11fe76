from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class AuditLog:
    """One entry of a record's correction trail. Never edited or deleted."""

    audit_id: int
    record_id: int
    changed_by: str
    timestamp: datetime
    old_value: str
    new_value: str
    reason: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar date."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    location_lat: float = 0.0
    location_lng: float = 0.0
    is_remote: bool = False
    audit_logs: tuple[AuditLog, ...] = field(default_factory=tuple)

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None


@dataclass(frozen=True)
class DailyReportRow:
    """Read-model: a user with their record for the day (or None when absent)."""

    user: User
    record: Optional[AttendanceRecord]
    status: AttendanceStatus


@dataclass(frozen=True)
class MonthlyReportRow:
    work_date: date
    record: Optional[AttendanceRecord]
    status: AttendanceStatus
    work_duration: Optional[timedelta]
    late_by_minutes: Optional[int]


@dataclass(frozen=True)
class DailySummary:
    work_date: date
    total_employees: int
    counts: dict[AttendanceStatus, int]
