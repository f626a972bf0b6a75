from __future__ import annotations

from flask import Flask, request

from ..access import policy
from ..common.web import current_user, domain_errors, json_body, login_required, ok, parse_enum, text_field
from ..container import Container
from ..core.enums import LeadStatus


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.lead_service

    def _row(lead) -> dict:
        assignee = users.get_by_id(lead.assigned_to)
        return {**lead.as_dict(), "assignee_name": assignee.name if assignee else "Unknown"}

    @app.route("/api/leads", methods=["GET"], endpoint="leads_list")
    @login_required
    @domain_errors
    def leads_list():
        actor = current_user(users)
        return ok(
            leads=[_row(lead) for lead in service.list_visible(actor=actor)],
            summary=service.summary(actor=actor),
            can_distribute=policy.can_distribute_leads(actor.role),
        )

    @app.route("/api/leads/distribute", methods=["POST"], endpoint="leads_distribute")
    @login_required
    @domain_errors
    def leads_distribute():
        actor = current_user(users)
        upload = request.files.get("file")
        if upload is not None:
            result = service.distribute_file(actor=actor, file_name=upload.filename or "", content=upload.read())
        else:
            result = service.distribute_text(actor=actor, text=text_field(json_body(), "text"))
        return ok(message=result.message, leads=[_row(lead) for lead in result.leads]), 201

    @app.route("/api/leads/<lead_id>/status", methods=["POST"], endpoint="lead_status")
    @login_required
    @domain_errors
    def lead_status(lead_id: str):
        status = parse_enum(LeadStatus, json_body().get("status"), "status")
        lead = service.change_status(actor=current_user(users), lead_id=lead_id, status=status)
        return ok(lead=_row(lead))
