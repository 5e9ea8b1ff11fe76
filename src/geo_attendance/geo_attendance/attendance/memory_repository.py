from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError, RecordNotFoundError
from .model import AttendanceRecord, AuditLog
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local store.

    Every read returns frozen records copied out under the lock, so a scan is a
    snapshot of the store at one instant.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id_by_key: dict[tuple[int, date], int] = {}
        self._next_id = 1
        self._next_audit_id = 1

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_id.get(int(attendance_id))

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            attendance_id = self._id_by_key.get((int(user_id), work_date))
            return self._by_id.get(attendance_id) if attendance_id else None

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
        key = (int(user_id), work_date)
        with self._lock:
            if key in self._id_by_key:
                raise DuplicateRecordError(f"Attendance for user {user_id} on {work_date} already exists")
            rec = AttendanceRecord(
                attendance_id=self._next_id,
                user_id=int(user_id),
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                location_lat=float(location_lat),
                location_lng=float(location_lng),
                is_remote=bool(is_remote),
            )
            self._next_id += 1
            self._by_id[rec.attendance_id] = rec
            self._id_by_key[key] = rec.attendance_id
            return rec

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime) -> AttendanceRecord:
        with self._lock:
            rec = self._require(attendance_id)
            rec = replace(rec, check_out_time=check_out_time)
            self._by_id[rec.attendance_id] = rec
            return rec

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
        with self._lock:
            rec = self._require(attendance_id)
            audit = AuditLog(
                audit_id=self._next_audit_id,
                record_id=rec.attendance_id,
                changed_by=changed_by,
                timestamp=timestamp,
                old_value=old_value,
                new_value=new_value,
                reason=reason,
            )
            self._next_audit_id += 1
            rec = replace(
                rec,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                status=status,
                audit_logs=rec.audit_logs + (audit,),
            )
            self._by_id[rec.attendance_id] = rec
            return rec

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        return self.list_by_user(user_id)[: int(limit)]

    def list_by_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_id.values() if r.user_id == int(user_id)]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_id.values() if r.work_date == work_date]
        items.sort(key=lambda r: r.user_id)
        return items

    def list_by_user_and_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [
                r
                for r in self._by_id.values()
                if r.user_id == int(user_id) and start_date <= r.work_date <= end_date
            ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def list_by_user_and_month(self, user_id: int, month: str) -> Sequence[AttendanceRecord]:
        start, end = month_bounds(month)
        return self.list_by_user_and_range(user_id, start, end)

    def _require(self, attendance_id: int) -> AttendanceRecord:
        rec = self._by_id.get(int(attendance_id))
        if not rec:
            raise RecordNotFoundError(f"Attendance record {attendance_id} not found")
        return rec
