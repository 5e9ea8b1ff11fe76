from datetime import date, datetime

import pytest

from geo_attendance.attendance.memory_repository import InMemoryAttendanceRepository
from geo_attendance.core.enums import AttendanceStatus
from geo_attendance.core.exceptions import DuplicateRecordError, RecordNotFoundError


def _create(repo, user_id, day):
    return repo.create(
        user_id=user_id,
        work_date=day,
        check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=9),
        status=AttendanceStatus.PRESENT,
        location_lat=0.0,
        location_lng=0.0,
        is_remote=False,
    )


def test_one_record_per_user_and_date():
    repo = InMemoryAttendanceRepository()
    _create(repo, 1, date(2026, 2, 2))

    with pytest.raises(DuplicateRecordError):
        _create(repo, 1, date(2026, 2, 2))

    _create(repo, 2, date(2026, 2, 2))
    _create(repo, 1, date(2026, 2, 3))
    assert len(repo.list_by_date(date(2026, 2, 2))) == 2


def test_month_listing_excludes_other_months():
    repo = InMemoryAttendanceRepository()
    for day in (date(2026, 1, 31), date(2026, 2, 1), date(2026, 2, 28), date(2026, 3, 1)):
        _create(repo, 1, day)

    rows = repo.list_by_user_and_month(1, "2026-02")

    assert [r.work_date for r in rows] == [date(2026, 2, 28), date(2026, 2, 1)]


def test_update_unknown_record():
    with pytest.raises(RecordNotFoundError):
        InMemoryAttendanceRepository().update_checkout(attendance_id=1, check_out_time=datetime(2026, 2, 2, 18))


def test_reads_are_snapshots():
    repo = InMemoryAttendanceRepository()
    rec = _create(repo, 1, date(2026, 2, 2))
    rows = repo.list_by_user(1)

    repo.update_checkout(attendance_id=rec.attendance_id, check_out_time=datetime(2026, 2, 2, 18))

    assert rows[0].check_out_time is None
    assert repo.get_by_id(rec.attendance_id).check_out_time == datetime(2026, 2, 2, 18)
