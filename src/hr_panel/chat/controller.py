from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    current_user,
    domain_errors,
    json_body,
    list_field,
    login_required,
    ok,
    parse_enum,
    text_field,
)
from ..container import Container
from ..core.enums import MessageKind


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.chat_service

    @app.route("/api/chat/groups", methods=["GET"], endpoint="chat_groups")
    @login_required
    @domain_errors
    def chat_groups():
        return jsonify(service.list_groups(actor=current_user(users)))

    @app.route("/api/chat/groups", methods=["POST"], endpoint="create_group")
    @login_required
    @domain_errors
    def create_group():
        data = json_body()
        group = service.create_group(
            actor=current_user(users),
            name=text_field(data, "name"),
            member_ids=list_field(data, "members"),
        )
        return ok(group=group.as_dict()), 201

    @app.route("/api/chat/groups/<group_id>", methods=["DELETE"], endpoint="delete_group")
    @login_required
    @domain_errors
    def delete_group(group_id: str):
        service.delete_group(actor=current_user(users), group_id=group_id)
        return ok()

    @app.route("/api/chat/groups/<group_id>/members", methods=["POST"], endpoint="add_group_member")
    @login_required
    @domain_errors
    def add_group_member(group_id: str):
        group = service.add_member(
            actor=current_user(users),
            group_id=group_id,
            member_id=text_field(json_body(), "user_id"),
        )
        return ok(group=group.as_dict())

    @app.route("/api/chat/groups/<group_id>/members/<user_id>", methods=["DELETE"], endpoint="remove_group_member")
    @login_required
    @domain_errors
    def remove_group_member(group_id: str, user_id: str):
        group = service.remove_member(actor=current_user(users), group_id=group_id, member_id=user_id)
        return ok(group=group.as_dict())

    @app.route("/api/chat/<chat_id>/messages", methods=["GET"], endpoint="chat_messages")
    @login_required
    @domain_errors
    def chat_messages(chat_id: str):
        messages = service.conversation(actor=current_user(users), chat_id=chat_id)
        return jsonify([m.as_dict() for m in messages])

    @app.route("/api/chat/<chat_id>/messages", methods=["POST"], endpoint="send_message")
    @login_required
    @domain_errors
    def send_message(chat_id: str):
        data = json_body()
        message = service.send_message(
            actor=current_user(users),
            receiver_id=chat_id,
            content=text_field(data, "content"),
            kind=parse_enum(MessageKind, text_field(data, "kind") or MessageKind.TEXT.value, "message kind"),
            file_name=text_field(data, "file_name", None),
        )
        return ok(message=message.as_dict()), 201

    @app.route("/api/chat/<chat_id>/messages", methods=["DELETE"], endpoint="clear_chat")
    @login_required
    @domain_errors
    def clear_chat(chat_id: str):
        removed = service.clear_chat(actor=current_user(users), chat_id=chat_id)
        return ok(removed=removed)

    @app.route("/api/chat/blocked", methods=["GET"], endpoint="blocked_users")
    @login_required
    @domain_errors
    def blocked_users():
        return jsonify(service.blocked_users(actor=current_user(users)))

    @app.route("/api/chat/blocked/<user_id>", methods=["POST"], endpoint="toggle_block")
    @login_required
    @domain_errors
    def toggle_block(user_id: str):
        blocked = service.toggle_block(actor=current_user(users), user_id=user_id)
        return ok(blocked=blocked)
