from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError, RecordNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceRecord, AuditLog
from .repository import AttendanceRepository

_RECORD_COLUMNS = (
    "attendance_id, user_id, work_date, check_in_time, check_out_time, status, "
    "location_lat, location_lng, is_remote"
)


def _to_audit(row: Dict[str, Any]) -> AuditLog:
    return AuditLog(
        audit_id=int(row["audit_id"]),
        record_id=int(row["record_id"]),
        changed_by=row["changed_by"],
        timestamp=row["changed_at"],
        old_value=row["old_value"],
        new_value=row["new_value"],
        reason=row["reason"],
    )


def _to_record(row: Dict[str, Any], audits: Sequence[AuditLog] = ()) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        check_in_time=row.get("check_in_time"),
        check_out_time=row.get("check_out_time"),
        status=AttendanceStatus(row["status"]),
        location_lat=float(row.get("location_lat") or 0),
        location_lng=float(row.get("location_lng") or 0),
        is_remote=bool(row.get("is_remote")),
        audit_logs=tuple(audits),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str, params: tuple, *, order_by: str, limit: Optional[int] = None) -> list[AttendanceRecord]:
        # Records and their audit trail are read inside one transaction.
        sql = f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE {where} ORDER BY {order_by}"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)
        cur.execute(sql, params)
        rows = fetchall(cur)
        if not rows:
            return []

        ids = [int(r["attendance_id"]) for r in rows]
        placeholders = ",".join(["%s"] * len(ids))
        cur.execute(
            f"""
            SELECT audit_id, record_id, changed_by, changed_at, old_value, new_value, reason
            FROM audit_logs
            WHERE record_id IN ({placeholders})
            ORDER BY audit_id ASC
            """,
            tuple(ids),
        )
        audits: dict[int, list[AuditLog]] = {}
        for a in fetchall(cur):
            audits.setdefault(int(a["record_id"]), []).append(_to_audit(a))

        return [_to_record(r, audits.get(int(r["attendance_id"]), ())) for r in rows]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            items = self._load(cur, "attendance_id=%s", (int(attendance_id),), order_by="attendance_id")
            return items[0] if items else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            items = self._load(cur, "user_id=%s AND work_date=%s", (int(user_id), work_date), order_by="attendance_id")
            return items[0] if items else None

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in_time, status, location_lat, location_lng, is_remote
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        check_in_time,
                        status.value,
                        float(location_lat),
                        float(location_lng),
                        1 if is_remote else 0,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError(f"Attendance for user {user_id} on {work_date} already exists") from e
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
            location_lat=float(location_lat),
            location_lng=float(location_lng),
            is_remote=bool(is_remote),
        )

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET check_out_time=%s WHERE attendance_id=%s",
                (check_out_time, int(attendance_id)),
            )
            items = self._load(cur, "attendance_id=%s", (int(attendance_id),), order_by="attendance_id")
        if not items:
            raise RecordNotFoundError(f"Attendance record {attendance_id} not found")
        return items[0]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s, status=%s
                WHERE attendance_id=%s
                """,
                (check_in_time, check_out_time, status.value, int(attendance_id)),
            )
            cur.execute(
                """
                INSERT INTO audit_logs(record_id, changed_by, changed_at, old_value, new_value, reason)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(attendance_id), changed_by, timestamp, old_value, new_value, reason),
            )
            items = self._load(cur, "attendance_id=%s", (int(attendance_id),), order_by="attendance_id")
        if not items:
            raise RecordNotFoundError(f"Attendance record {attendance_id} not found")
        return items[0]

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "user_id=%s", (int(user_id),), order_by="work_date DESC", limit=limit)

    def list_by_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "user_id=%s", (int(user_id),), order_by="work_date DESC")

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "work_date=%s", (work_date,), order_by="user_id ASC")

    def list_by_user_and_range(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(
                cur,
                "user_id=%s AND work_date BETWEEN %s AND %s",
                (int(user_id), start_date, end_date),
                order_by="work_date DESC",
            )

    def list_by_user_and_month(self, user_id: int, month: str) -> Sequence[AttendanceRecord]:
        start, end = month_bounds(month)
        return self.list_by_user_and_range(user_id, start, end)
