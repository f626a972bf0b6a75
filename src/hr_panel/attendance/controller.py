from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import (
    current_user,
    domain_errors,
    json_body,
    login_required,
    ok,
    parse_date_field,
    parse_enum,
    text_field,
)
from ..container import Container
from ..core.enums import ActivityType, AttendanceStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @domain_errors
    def attendance_today():
        return ok(**service.get_today(current_user(users)))

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @login_required
    @domain_errors
    def punch_in():
        actor = current_user(users)
        service.punch_in(actor)
        return ok(message="Punched in", **service.get_today(actor))

    @app.route("/api/attendance/state", methods=["POST"], endpoint="change_state")
    @login_required
    @domain_errors
    def change_state():
        actor = current_user(users)
        activity = parse_enum(ActivityType, json_body().get("activity"), "activity")
        service.change_state(actor, activity)
        return ok(**service.get_today(actor))

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @login_required
    @domain_errors
    def punch_out():
        actor = current_user(users)
        record = service.punch_out(actor)
        return ok(message=f"Punched out ({record.status.value})", **service.get_today(actor))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    @login_required
    @domain_errors
    def attendance_history():
        return jsonify(service.get_history_ui(current_user(users)))

    @app.route("/api/attendance/status", methods=["POST"], endpoint="override_attendance")
    @login_required
    @domain_errors
    def override_attendance():
        data = json_body()
        record = service.set_status(
            current_user(users),
            user_id=text_field(data, "user_id"),
            work_date=parse_date_field(data.get("date"), "Date"),
            status=parse_enum(AttendanceStatus, data.get("status"), "status"),
            note=text_field(data, "note"),
        )
        return ok(status=record.status.value)

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export")
    @login_required
    @domain_errors
    def attendance_export():
        csv_text = service.export_csv(current_user(users))
        company = container.company_service.get().name.replace(" ", "_")
        filename = f"{company}_Attendance_Report_{now_local().strftime('%Y-%m-%d')}.csv"
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/calendar", methods=["GET"], endpoint="attendance_calendar")
    @login_required
    @domain_errors
    def attendance_calendar():
        today = now_local().date()
        month_key = request.args.get("month") or today.strftime("%Y-%m")
        try:
            month = datetime.strptime(month_key, "%Y-%m")
        except ValueError:
            raise ValidationError("Month must be YYYY-MM")

        view = container.calendar_service.month_view(
            actor=current_user(users),
            year=month.year,
            month=month.month,
            target_user_id=request.args.get("user_id"),
            today=today,
        )
        return jsonify(view)
