from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..access import policy
from ..common.web import current_user, domain_errors, json_body, login_required, ok, text_field
from ..container import Container
from .model import PayslipDocument


def _flag(value) -> bool:
    # JSON sends booleans, multipart forms send strings.
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.payroll_service

    def _row(entry) -> dict:
        user = users.get_by_id(entry.user_id)
        return {
            **entry.as_dict(),
            "name": user.name if user else "Unknown",
            "department": user.department if user else "",
        }

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @login_required
    @domain_errors
    def payroll_list():
        actor = current_user(users)
        entries = service.list_visible(actor=actor, search=request.args.get("q", ""))
        return ok(
            entries=[_row(e) for e in entries],
            can_manage=policy.can_manage_payroll(actor.role),
        )

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_submit")
    @login_required
    @domain_errors
    def payroll_submit():
        # Multipart when a payslip file is attached, JSON otherwise.
        data = request.form if request.files else json_body()
        upload = request.files.get("document")
        document = None
        if upload and upload.filename:
            document = PayslipDocument(
                file_name=upload.filename,
                content=upload.read(),
                content_type=upload.mimetype or "application/octet-stream",
            )

        entry = service.submit(
            actor=current_user(users),
            user_id=text_field(data, "user_id"),
            month=text_field(data, "month"),
            base_salary=data.get("base_salary"),
            bonus=data.get("bonus", 0),
            deductions=data.get("deductions", 0),
            document=document,
            remove_document=_flag(data.get("remove_document")),
        )
        return ok(entry=_row(entry)), 201

    @app.route("/api/payroll/<entry_id>/payslip", methods=["GET"], endpoint="payslip_download")
    @login_required
    @domain_errors
    def payslip_download(entry_id: str):
        payslip = service.download_payslip(actor=current_user(users), entry_id=entry_id)
        return send_file(
            io.BytesIO(payslip.content),
            mimetype=payslip.content_type,
            as_attachment=True,
            download_name=payslip.file_name,
        )
