from datetime import datetime

import pytest

from geo_attendance.common.datetime_utils import FixedClock
from geo_attendance.main import create_app

OFFICE = {"lat": 12.9716, "lng": 77.5946}


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 2, 2, 9, 30))


@pytest.fixture
def app(clock):
    return create_app("geo_attendance.settings.testing", clock=clock)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email):
    resp = client.post("/api/login", json={"email": email})
    assert resp.status_code == 200
    return resp.get_json()["user"]


def test_login_and_me(client):
    user = login(client, "priya@techflow.com")

    assert user["role"] == "Employee"
    assert client.get("/api/me").get_json()["email"] == "priya@techflow.com"

    client.post("/api/logout")
    assert client.get("/api/me").status_code == 401


def test_login_unknown_email(client):
    resp = client.post("/api/login", json={"email": "ghost@techflow.com"})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "UserNotFoundError"


def test_check_in_requires_login(client):
    assert client.post("/api/attendance/check-in", json=OFFICE).status_code == 401


def test_check_in_and_out(client, clock):
    login(client, "priya@techflow.com")

    resp = client.post("/api/attendance/check-in", json=OFFICE)
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["in_zone"] is True
    assert body["distance_meters"] == 0
    assert body["record"]["status"] == "Present"
    assert body["record"]["work_date"] == "2026-02-02"
    assert body["record"]["check_in_time"] == "2026-02-02T09:30:00"

    clock.advance(hours=9)
    resp = client.post("/api/attendance/check-out")
    assert resp.get_json()["record"]["check_out_time"] == "2026-02-02T18:30:00"

    resp = client.post("/api/attendance/check-out")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "AlreadyCheckedOutError"

    today = client.get("/api/attendance/today").get_json()["record"]
    assert today["check_out_time"] == "2026-02-02T18:30:00"
    assert len(client.get("/api/attendance/history").get_json()) == 1


def test_check_in_without_location(client):
    login(client, "priya@techflow.com")

    resp = client.post("/api/attendance/check-in", json={})

    assert resp.status_code == 422
    assert client.get("/api/attendance/today").get_json()["record"] is None


def test_remote_check_in(client):
    login(client, "amit@techflow.com")

    body = client.post("/api/attendance/check-in", json={"lat": 28.6139, "lng": 77.2090}).get_json()

    assert body["in_zone"] is False
    assert body["record"]["is_remote"] is True
    assert body["distance_meters"] > 1_000_000


def test_check_out_without_check_in(client):
    login(client, "priya@techflow.com")
    resp = client.post("/api/attendance/check-out")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "NotCheckedInError"


def test_admin_correction_is_audited(client):
    login(client, "priya@techflow.com")
    record_id = client.post("/api/attendance/check-in", json=OFFICE).get_json()["record"]["attendance_id"]

    assert client.patch(f"/api/attendance/{record_id}", json={"status": "Late"}).status_code == 403

    login(client, "admin@techflow.com")
    resp = client.patch(
        f"/api/attendance/{record_id}",
        json={"check_in_time": "2026-02-02T10:45:00", "reason": "Forgot to check in"},
    )
    record = resp.get_json()["record"]

    assert resp.status_code == 200
    assert record["status"] == "Late"
    assert len(record["audit_logs"]) == 1
    assert record["audit_logs"][0]["changed_by"] == "Admin User"
    assert record["audit_logs"][0]["reason"] == "Forgot to check in"


def test_correction_of_unknown_record(client):
    login(client, "admin@techflow.com")
    assert client.patch("/api/attendance/999", json={"status": "Late"}).status_code == 404


def test_correction_with_utc_offset_keeps_check_out_working(client, clock):
    login(client, "priya@techflow.com")
    record_id = client.post("/api/attendance/check-in", json=OFFICE).get_json()["record"]["attendance_id"]

    login(client, "admin@techflow.com")
    resp = client.patch(f"/api/attendance/{record_id}", json={"check_in_time": "2026-02-02T09:00:00+05:30"})
    assert resp.status_code == 200
    assert len(resp.get_json()["record"]["check_in_time"]) == len("2026-02-02T09:00:00")

    clock.current = datetime(2026, 2, 2, 23, 0)
    login(client, "priya@techflow.com")
    resp = client.post("/api/attendance/check-out")
    assert resp.status_code == 200
    assert resp.get_json()["record"]["check_out_time"] == "2026-02-02T23:00:00"

    login(client, "admin@techflow.com")
    resp = client.patch(f"/api/attendance/{record_id}", json={"check_out_time": "2026-02-02T23:00:00+00:00"})
    assert resp.status_code == 200
    assert len(resp.get_json()["record"]["audit_logs"]) == 2

def test_correction_rejects_unknown_status(client):
    login(client, "priya@techflow.com")
    record_id = client.post("/api/attendance/check-in", json=OFFICE).get_json()["record"]["attendance_id"]

    login(client, "admin@techflow.com")
    assert client.patch(f"/api/attendance/{record_id}", json={"status": "Sleeping"}).status_code == 400


def test_daily_summary(client, clock):
    login(client, "priya@techflow.com")
    client.post("/api/attendance/check-in", json=OFFICE)
    clock.advance(hours=1, minutes=10)
    login(client, "amit@techflow.com")
    client.post("/api/attendance/check-in", json=OFFICE)

    login(client, "admin@techflow.com")
    body = client.get("/api/reports/summary?date=2026-02-02").get_json()

    assert body["total_employees"] == 4
    assert body["counts"]["Present"] == 1
    assert body["counts"]["Late"] == 1
    assert body["counts"]["Absent"] == 2
    assert [r["name"] for r in body["late_arrivals"]] == ["Amit Singh"]

    daily = client.get("/api/reports/daily?date=2026-02-02&status=Late").get_json()
    assert [r["late_by"] for r in daily["rows"]] == ["25m"]


def test_employee_cannot_read_other_monthly_report(client):
    login(client, "priya@techflow.com")
    assert client.get("/api/reports/monthly?user_id=4&month=2026-02").status_code == 403
    assert len(client.get("/api/reports/monthly?month=2026-02").get_json()["rows"]) == 28


def test_payroll_flow(client):
    login(client, "priya@techflow.com")
    client.post("/api/attendance/check-in", json=OFFICE)
    assert client.post("/api/payroll/slips", json={"user_id": 3, "month": "2026-02"}).status_code == 403

    login(client, "admin@techflow.com")
    resp = client.post("/api/payroll/slips", json={"user_id": 3, "month": "2026-02"})
    slip = resp.get_json()["slip"]
    assert resp.status_code == 201
    assert slip["present_days"] == 1
    assert slip["total_days"] == 30
    assert slip["gross_salary"] == 2222
    assert slip["net_salary"] == 2022

    client.post("/api/payroll/slips", json={"user_id": 4, "month": "2026-02"})
    assert len(client.get("/api/payroll/slips").get_json()) == 2

    login(client, "priya@techflow.com")
    mine = client.get("/api/payroll/slips").get_json()
    assert [s["user_id"] for s in mine] == [3]


def test_payroll_requires_month(client):
    login(client, "admin@techflow.com")
    assert client.post("/api/payroll/preview", json={"user_id": 3}).status_code == 400
    assert client.post("/api/payroll/preview", json={"user_id": 3, "month": "02-2026"}).status_code == 400


def test_admin_adds_user(client):
    login(client, "admin@techflow.com")

    resp = client.post(
        "/api/users",
        json={"name": "Neha Rao", "email": "neha@techflow.com", "department": "Design", "base_salary": 500000},
    )

    assert resp.status_code == 201
    assert resp.get_json()["user"]["user_id"] == 5
    assert len(client.get("/api/users").get_json()) == 5


def test_employee_summary_shows_only_own_late_arrival(client, clock):
    clock.current = datetime(2026, 2, 2, 10, 30)
    login(client, "priya@techflow.com")
    client.post("/api/attendance/check-in", json=OFFICE)
    login(client, "amit@techflow.com")
    client.post("/api/attendance/check-in", json=OFFICE)

    body = client.get("/api/reports/summary?date=2026-02-02").get_json()
    assert [r["name"] for r in body["late_arrivals"]] == ["Amit Singh"]
    assert body["counts"]["Late"] == 2

    login(client, "manager@techflow.com")
    body = client.get("/api/reports/summary?date=2026-02-02").get_json()
    assert [r["name"] for r in body["late_arrivals"]] == ["Priya Sharma", "Amit Singh"]
