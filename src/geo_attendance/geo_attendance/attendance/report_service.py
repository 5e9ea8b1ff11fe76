from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus
from ..core.policy import AttendancePolicy
from ..users.repository import UserRepository
from .model import AttendanceRecord, DailyReportRow, DailySummary, MonthlyReportRow
from .repository import AttendanceRepository


def work_duration(check_in: Optional[datetime], check_out: Optional[datetime]) -> Optional[timedelta]:
    if not check_in or not check_out:
        return None
    delta = check_out - check_in
    if delta < timedelta(0):
        return None
    return delta


def format_duration(value: Optional[timedelta]) -> str:
    if value is None:
        return "-"
    minutes = int(value.total_seconds() // 60)
    return f"{minutes // 60}h {minutes % 60}m"


def lateness_minutes(check_in: Optional[datetime], policy: AttendancePolicy) -> Optional[int]:
    """Whole minutes past the grace deadline, or None when not late."""
    if not check_in:
        return None
    minutes = policy.minutes_late(check_in)
    return minutes if minutes > 0 else None


def format_lateness(minutes: Optional[int]) -> str:
    if not minutes:
        return "-"
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m" if hours else f"{mins}m"


def _status_of(record: Optional[AttendanceRecord]) -> AttendanceStatus:
    return record.status if record else AttendanceStatus.ABSENT


class AttendanceReportService:
    """Read-only views over attendance. Nothing here changes a record."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, *, policy: AttendancePolicy | None = None):
        self._attendance = attendance
        self._users = users
        self._policy = policy or AttendancePolicy()

    def daily_report(
        self,
        work_date: date,
        *,
        department: Optional[str] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> list[DailyReportRow]:
        """Every known user once for the date; users without a record are Absent."""
        users = self._users.list_users()
        by_user = {r.user_id: r for r in self._attendance.list_by_date(work_date)}

        rows = []
        for u in users:
            if department and u.department != department:
                continue
            record = by_user.get(u.user_id)
            row = DailyReportRow(user=u, record=record, status=_status_of(record))
            if status is not None and row.status != status:
                continue
            rows.append(row)
        return rows

    def monthly_report(self, user_id: int, month: str) -> list[MonthlyReportRow]:
        """One row per calendar day of the month, newest first."""
        start, end = month_bounds(month)
        by_date = {r.work_date: r for r in self._attendance.list_by_user_and_month(user_id, month)}

        rows = []
        day = end
        while day >= start:
            record = by_date.get(day)
            rows.append(
                MonthlyReportRow(
                    work_date=day,
                    record=record,
                    status=_status_of(record),
                    work_duration=work_duration(record.check_in_time, record.check_out_time) if record else None,
                    late_by_minutes=lateness_minutes(record.check_in_time, self._policy) if record else None,
                )
            )
            day -= timedelta(days=1)
        return rows

    def daily_summary(self, work_date: date) -> DailySummary:
        rows = self.daily_report(work_date)
        counts = {s: 0 for s in AttendanceStatus}
        for row in rows:
            counts[row.status] += 1
        return DailySummary(work_date=work_date, total_employees=len(rows), counts=counts)

    def late_arrivals(self, work_date: date) -> Sequence[DailyReportRow]:
        return self.daily_report(work_date, status=AttendanceStatus.LATE)
