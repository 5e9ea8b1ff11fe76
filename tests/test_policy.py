from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from geo_attendance.common.datetime_utils import month_bounds, parse_iso_datetime, parse_month_key
from geo_attendance.container import build_container
from geo_attendance.core.exceptions import ValidationError
from geo_attendance.core.policy import AttendancePolicy, PayrollPolicy
from geo_attendance.settings import get_settings_module


def test_defaults():
    attendance = AttendancePolicy()
    payroll = PayrollPolicy()

    assert (attendance.office_lat, attendance.office_lng) == (12.9716, 77.5946)
    assert attendance.geofence_radius_meters == 2000
    assert (attendance.office_start_hour, attendance.late_grace_minutes) == (10, 15)
    assert payroll.days_per_month == 30
    assert payroll.professional_tax == 200
    assert (payroll.tds_threshold, payroll.tds_rate) == (50_000, 0.10)


def test_from_settings_reads_overrides():
    settings = SimpleNamespace(OFFICE_START_HOUR=9, LATE_GRACE_MINUTES=0, GEOFENCE_RADIUS_METERS=150, TDS_RATE=0.2)

    attendance = AttendancePolicy.from_settings(settings)
    payroll = PayrollPolicy.from_settings(settings)

    assert (attendance.office_start_hour, attendance.late_grace_minutes) == (9, 0)
    assert attendance.geofence_radius_meters == 150
    assert attendance.office_lat == 12.9716
    assert payroll.tds_rate == 0.2


@pytest.mark.parametrize(
    "factory",
    [
        lambda: AttendancePolicy(office_start_hour=24),
        lambda: AttendancePolicy(late_grace_minutes=60),
        lambda: AttendancePolicy(geofence_radius_meters=-1),
        lambda: PayrollPolicy(days_per_month=0),
        lambda: PayrollPolicy(basic_pct=0.5, hra_pct=0.5, da_pct=0.1),
        lambda: PayrollPolicy(tds_rate=1.5),
    ],
)
def test_invalid_policies(factory):
    with pytest.raises(ValidationError):
        factory()


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "geo_attendance.settings.production"),
        ("test", "geo_attendance.settings.testing"),
        ("anything", "geo_attendance.settings.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_unknown_storage_backend():
    with pytest.raises(ValidationError):
        build_container(SimpleNamespace(STORAGE_BACKEND="redis"))


def test_month_helpers():
    assert parse_month_key("2024-02") == (2024, 2)
    assert month_bounds("2024-02")[1].day == 29
    with pytest.raises(ValidationError):
        parse_month_key("2024-2-1")


def test_timestamps_with_offset_become_local_naive():
    parsed = parse_iso_datetime("2026-02-02T03:30:00+00:00")

    assert parsed.tzinfo is None
    assert parsed == datetime(2026, 2, 2, 3, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parse_iso_datetime("2026-02-02T09:00:00") == datetime(2026, 2, 2, 9, 0)
    with pytest.raises(ValidationError):
        parse_iso_datetime("yesterday")
