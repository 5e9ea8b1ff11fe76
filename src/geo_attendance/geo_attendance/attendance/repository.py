from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Keyed store of attendance records: at most one per (user_id, work_date)."""

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        location_lat: float,
        location_lng: float,
        is_remote: bool,
    ) -> AttendanceRecord:
        """Insert a new record; raises DuplicateRecordError if the key exists."""

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def apply_correction(
        self,
        *,
        attendance_id: int,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        changed_by: str,
        timestamp: datetime,
        old_value: str,
        new_value: str,
        reason: str,
    ) -> AttendanceRecord:
        """Admin-only overwrite; appends one AuditLog in the same operation."""

        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_user_and_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_user_and_month(self, user_id: int, month: str) -> Sequence[AttendanceRecord]:
        """Records of a user within a YYYY-MM month."""

        raise NotImplementedError
