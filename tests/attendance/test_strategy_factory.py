from datetime import datetime

from geo_attendance.attendance.factory import AttendanceStrategyFactory, is_late
from geo_attendance.attendance.report_service import lateness_minutes
from geo_attendance.attendance.strategies.late_strategy import LateStrategy
from geo_attendance.attendance.strategies.on_time_strategy import OnTimeStrategy
from geo_attendance.core.enums import AttendanceStatus
from geo_attendance.core.policy import AttendancePolicy

POLICY = AttendancePolicy(office_start_hour=10, late_grace_minutes=15)


def test_factory_checkin_on_time_at_grace_deadline():
    now = datetime(2025, 1, 1, 10, 15, 59)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, policy=POLICY)

    assert isinstance(strategy, OnTimeStrategy)
    assert strategy.decide_checkin(now=now, policy=POLICY).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_one_minute_after_grace():
    now = datetime(2025, 1, 1, 10, 16, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, policy=POLICY)
    decision = strategy.decide_checkin(now=now, policy=POLICY)

    assert isinstance(strategy, LateStrategy)
    assert decision.status == AttendanceStatus.LATE
    assert decision.late_by_minutes == 1


def test_later_hour_is_late_even_with_small_minute():
    assert is_late(datetime(2025, 1, 1, 11, 0), POLICY) is True
    assert is_late(datetime(2025, 1, 1, 9, 59), POLICY) is False
    assert is_late(datetime(2025, 1, 1, 10, 0), POLICY) is False


def test_status_and_report_agree_on_lateness():
    for minute in range(0, 60):
        now = datetime(2025, 1, 1, 10, minute, 30)
        reported = lateness_minutes(now, POLICY)

        assert is_late(now, POLICY) is (reported is not None)
        if reported is not None:
            assert LateStrategy().decide_checkin(now=now, policy=POLICY).late_by_minutes == reported
