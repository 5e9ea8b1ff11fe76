from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock, format_clock_time, to_local_naive
from ..core.constants import DEFAULT_CORRECTION_REASON, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AlreadyCheckedOutError,
    AuthorizationError,
    LocationUnavailableError,
    NotCheckedInError,
    RecordNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from ..core.policy import AttendancePolicy
from ..geo.classifier import Coords, GeoClassification, Geofence
from ..geo.source import GeoSource
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def snapshot_text(
    check_in_time: Optional[datetime],
    check_out_time: Optional[datetime],
    status: AttendanceStatus,
) -> str:
    """Human readable record state stored in audit logs."""
    return f"In: {format_clock_time(check_in_time)}, Out: {format_clock_time(check_out_time)}, Status: {status.value}"


class AttendanceService:
    """Check-in/check-out state machine and the audited correction path.

    Per (user, date) a record moves NoRecord -> CheckedIn -> CheckedOut. Check-in
    is idempotent for the day, check-out is terminal for the employee, and only
    an Admin may alter a record afterwards through `correct`.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        policy: AttendancePolicy | None = None,
        clock: Clock | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._policy = policy or AttendancePolicy()
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._geofence = Geofence.from_policy(self._policy)

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def classify_position(self, position: Coords) -> GeoClassification:
        return self._geofence.classify(position)

    def decide_status(self, when: datetime) -> AttendanceStatus:
        strategy = self._factory.for_checkin(now=when, policy=self._policy)
        return strategy.decide_checkin(now=when, policy=self._policy).status

    def check_in(
        self,
        user_id: int,
        *,
        lat: float,
        lng: float,
        is_remote: bool | None = None,
        work_date: date | None = None,
    ) -> AttendanceRecord:
        now = self._clock.now()
        work_date = work_date or now.date()

        if not self._users.get_by_id(user_id):
            raise UserNotFoundError(f"User {user_id} does not exist")

        existing = self._attendance.get_for_user_and_date(user_id, work_date)
        if existing:
            logger.debug("Repeated check-in for user %s on %s; keeping record %s", user_id, work_date, existing.attendance_id)
            return existing

        if is_remote is None:
            is_remote = not self.classify_position(Coords(lat=lat, lng=lng)).in_zone

        strategy = self._factory.for_checkin(now=now, policy=self._policy)
        decision = strategy.decide_checkin(now=now, policy=self._policy)

        record = self._attendance.create(
            user_id=user_id,
            work_date=work_date,
            check_in_time=now,
            status=decision.status,
            location_lat=lat,
            location_lng=lng,
            is_remote=is_remote,
        )
        logger.info(
            "User %s checked in at %s (%s%s%s)",
            user_id,
            now.isoformat(timespec="seconds"),
            decision.status.value,
            f" by {decision.late_by_minutes}m" if decision.late_by_minutes else "",
            ", remote" if is_remote else "",
        )
        return record

    def check_in_from_source(self, user_id: int, source: GeoSource, *, work_date: date | None = None) -> AttendanceRecord:
        position = source.current_position()
        if position is None:
            raise LocationUnavailableError("Location is required to mark attendance")
        return self.check_in(user_id, lat=position.lat, lng=position.lng, work_date=work_date)

    def check_out(self, user_id: int, *, work_date: date | None = None) -> AttendanceRecord:
        now = self._clock.now()
        work_date = work_date or now.date()

        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if not record or record.check_in_time is None:
            raise NotCheckedInError("No check-in record found for today")
        if record.check_out_time is not None:
            raise AlreadyCheckedOutError("Check-out already marked. Cannot revert")
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        record = self._attendance.update_checkout(attendance_id=record.attendance_id, check_out_time=now)
        logger.info("User %s checked out at %s", user_id, now.isoformat(timespec="seconds"))
        return record

    def correct(
        self,
        *,
        current_role: Role,
        actor_name: str,
        record_id: int,
        check_in_time: datetime | None = None,
        check_out_time: datetime | None = None,
        status: AttendanceStatus | None = None,
        reason: str = DEFAULT_CORRECTION_REASON,
    ) -> AttendanceRecord:
        """Admin override. Fields left as None keep their current value."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admin can correct attendance records")

        record = self._attendance.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(f"Attendance record {record_id} not found")

        if check_in_time is not None:
            check_in_time = to_local_naive(check_in_time)
        if check_out_time is not None:
            check_out_time = to_local_naive(check_out_time)

        new_check_in = check_in_time if check_in_time is not None else record.check_in_time
        new_check_out = check_out_time if check_out_time is not None else record.check_out_time

        new_status = record.status
        if status is not None:
            new_status = status
        elif check_in_time is not None and check_in_time != record.check_in_time:
            new_status = self.decide_status(check_in_time)

        if new_check_out is not None:
            if new_check_in is None:
                raise ValidationError("Check-out cannot be set without a check-in")
            if new_check_out < new_check_in:
                raise ValidationError("Check-out time cannot be earlier than check-in time")

        updated = self._attendance.apply_correction(
            attendance_id=record.attendance_id,
            check_in_time=new_check_in,
            check_out_time=new_check_out,
            status=new_status,
            changed_by=actor_name,
            timestamp=self._clock.now(),
            old_value=snapshot_text(record.check_in_time, record.check_out_time, record.status),
            new_value=snapshot_text(new_check_in, new_check_out, new_status),
            reason=(reason or "").strip() or DEFAULT_CORRECTION_REASON,
        )
        logger.info("Record %s corrected by %s", record.attendance_id, actor_name)
        return updated

    def get_record(self, record_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(f"Attendance record {record_id} not found")
        return record

    def get_today_record(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, self._clock.now().date())

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_user(user_id, limit)
