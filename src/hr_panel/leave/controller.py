from __future__ import annotations

from flask import Flask

from ..access import policy
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
from ..core.enums import LeaveType


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.leave_service

    def _with_name(row: dict) -> dict:
        user = users.get_by_id(row["user_id"])
        return {**row, "name": user.name if user else "Unknown"}

    @app.route("/api/leave", methods=["GET"], endpoint="leave_requests")
    @login_required
    @domain_errors
    def leave_requests():
        actor = current_user(users)
        return ok(
            requests=[_with_name(r.as_dict()) for r in service.list_visible(actor=actor)],
            holidays=[
                {"title": e.title, "date": e.event_date.strftime("%Y-%m-%d")} for e in service.list_holidays()
            ],
            can_request=policy.can_request_leave(actor.role),
            can_decide=policy.can_decide_leave(actor.role),
        )

    @app.route("/api/leave", methods=["POST"], endpoint="create_leave")
    @login_required
    @domain_errors
    def create_leave():
        data = json_body()
        req = service.create_leave(
            actor=current_user(users),
            leave_type=parse_enum(LeaveType, data.get("type"), "leave type"),
            start_date=parse_date_field(data.get("start_date"), "Start date"),
            end_date=parse_date_field(data.get("end_date"), "End date"),
            reason=text_field(data, "reason"),
        )
        return ok(request=req.as_dict()), 201

    @app.route("/api/leave/<request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    @domain_errors
    def approve_leave(request_id: str):
        req = service.approve(actor=current_user(users), request_id=request_id)
        return ok(request=req.as_dict())

    @app.route("/api/leave/<request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    @domain_errors
    def reject_leave(request_id: str):
        req = service.reject(actor=current_user(users), request_id=request_id)
        return ok(request=req.as_dict())
