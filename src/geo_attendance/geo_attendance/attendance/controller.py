from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import month_key, parse_iso_date, parse_iso_datetime
from ..common.serializers import to_json
from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..core.constants import DEFAULT_CORRECTION_REASON, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..geo.source import StaticGeoSource
from .model import DailyReportRow, MonthlyReportRow
from .report_service import format_duration, format_lateness, lateness_minutes, work_duration


def _parse_status(value: str | None) -> AttendanceStatus | None:
    if not value or value == "All":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown status: {value}")


def register(app: Flask, container: Container) -> None:
    policy = container.attendance_policy

    def _daily_row(row: DailyReportRow) -> dict:
        rec = row.record
        return {
            "user": to_json(row.user),
            "record": to_json(rec) if rec else None,
            "status": row.status.value,
            "duration": format_duration(work_duration(rec.check_in_time, rec.check_out_time)) if rec else "-",
            "late_by": format_lateness(lateness_minutes(rec.check_in_time, policy)) if rec else "-",
        }

    def _monthly_row(row: MonthlyReportRow) -> dict:
        return {
            "work_date": row.work_date.strftime("%Y-%m-%d"),
            "record": to_json(row.record) if row.record else None,
            "status": row.status.value,
            "duration": format_duration(row.work_duration),
            "late_by": format_lateness(row.late_by_minutes),
        }

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        source = StaticGeoSource.from_payload(json_body())
        record = container.attendance_service.check_in_from_source(current_user_id(), source)
        geo = container.attendance_service.classify_position(source.position)
        return jsonify(
            {
                "success": True,
                "record": to_json(record),
                "distance_meters": round(geo.distance_meters),
                "in_zone": geo.in_zone,
            }
        )

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_user_id())
        return jsonify({"success": True, "record": to_json(record)})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        record = container.attendance_service.get_today_record(current_user_id())
        return jsonify({"record": to_json(record) if record else None})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        rows = container.attendance_service.get_history(current_user_id(), limit=limit)
        return jsonify([to_json(r) for r in rows])

    @app.route("/api/attendance/<int:record_id>", methods=["GET"], endpoint="attendance_record")
    @login_required
    def attendance_record(record_id: int):
        record = container.attendance_service.get_record(record_id)
        if record.user_id != current_user_id() and current_role() == Role.EMPLOYEE:
            return jsonify({"success": False, "message": "Not allowed"}), 403
        return jsonify(to_json(record))

    @app.route("/api/attendance/<int:record_id>", methods=["PATCH"], endpoint="correct_attendance")
    @admin_required
    def correct_attendance(record_id: int):
        data = json_body()
        record = container.attendance_service.correct(
            current_role=current_role(),
            actor_name=str(session.get("name", "")),
            record_id=record_id,
            check_in_time=parse_iso_datetime(data["check_in_time"]) if data.get("check_in_time") else None,
            check_out_time=parse_iso_datetime(data["check_out_time"]) if data.get("check_out_time") else None,
            status=_parse_status(data.get("status")),
            reason=str(data.get("reason") or DEFAULT_CORRECTION_REASON),
        )
        return jsonify({"success": True, "record": to_json(record)})

    @app.route("/api/reports/daily", methods=["GET"], endpoint="daily_report")
    @login_required
    def daily_report():
        day = parse_iso_date(request.args["date"]) if request.args.get("date") else container.clock.now().date()
        department = request.args.get("department")
        rows = container.report_service.daily_report(
            day,
            department=None if department in (None, "", "All") else department,
            status=_parse_status(request.args.get("status")),
        )
        if current_role() == Role.EMPLOYEE:
            rows = [r for r in rows if r.user.user_id == current_user_id()]
        return jsonify({"date": day.strftime("%Y-%m-%d"), "rows": [_daily_row(r) for r in rows]})

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    @login_required
    def monthly_report():
        user_id = request.args.get("user_id", current_user_id(), type=int)
        if user_id != current_user_id() and current_role() == Role.EMPLOYEE:
            return jsonify({"success": False, "message": "Not allowed"}), 403
        month = request.args.get("month") or month_key(container.clock.now().date())
        rows = container.report_service.monthly_report(user_id, month)
        return jsonify({"user_id": user_id, "month": month, "rows": [_monthly_row(r) for r in rows]})

    @app.route("/api/reports/summary", methods=["GET"], endpoint="daily_summary")
    @login_required
    def daily_summary():
        day = parse_iso_date(request.args["date"]) if request.args.get("date") else container.clock.now().date()
        summary = container.report_service.daily_summary(day)
        late = container.report_service.late_arrivals(day)
        if current_role() == Role.EMPLOYEE:
            late = [r for r in late if r.user.user_id == current_user_id()]
        return jsonify(
            {
                "date": day.strftime("%Y-%m-%d"),
                "total_employees": summary.total_employees,
                "counts": {status.value: n for status, n in summary.counts.items()},
                "late_arrivals": [
                    {"user_id": r.user.user_id, "name": r.user.name, "check_in_time": to_json(r.record.check_in_time)}
                    for r in late
                    if r.record
                ],
            }
        )
