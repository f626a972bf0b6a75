from __future__ import annotations

from flask import Flask

from ..access import policy
from ..common.web import current_user, domain_errors, json_body, login_required, ok, text_field
from ..container import Container
from ..core.enums import Priority


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.announcement_service

    @app.route("/api/announcements", methods=["GET"], endpoint="announcements")
    @login_required
    @domain_errors
    def announcements():
        actor = current_user(users)
        return ok(
            announcements=[a.as_dict() for a in service.list_all()],
            events=[
                {"title": e.title, "date": e.event_date.strftime("%Y-%m-%d"), "type": e.event_type.value}
                for e in container.events_repo.list_all()
            ],
            can_post=policy.can_post_announcements(actor.role),
        )

    @app.route("/api/announcements", methods=["POST"], endpoint="post_announcement")
    @login_required
    @domain_errors
    def post_announcement():
        data = json_body()
        announcement = service.post(
            actor=current_user(users),
            title=text_field(data, "title"),
            content=text_field(data, "content"),
            priority=text_field(data, "priority") or Priority.NORMAL.value,
        )
        return ok(announcement=announcement.as_dict()), 201

    @app.route("/api/announcements/<announcement_id>", methods=["DELETE"], endpoint="delete_announcement")
    @login_required
    @domain_errors
    def delete_announcement(announcement_id: str):
        service.delete(actor=current_user(users), announcement_id=announcement_id)
        return ok()

    @app.route("/api/announcements/draft", methods=["POST"], endpoint="draft_announcement")
    @login_required
    @domain_errors
    def draft_announcement():
        data = json_body()
        text = service.generate_draft(
            actor=current_user(users),
            topic=text_field(data, "topic"),
            tone=text_field(data, "tone") or "Formal",
        )
        return ok(content=text)
