from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..access import policy
from ..common.web import current_user, domain_errors, json_body, login_required, ok, parse_enum, text_field
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    users = container.users_repo

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @domain_errors
    def login():
        data = json_body()
        session_user = container.auth_service.authenticate(
            text_field(data, "email"),
            text_field(data, "password"),
        )

        session.clear()
        session["user_id"] = session_user.user_id
        session["name"] = session_user.name
        session["role"] = session_user.role.value
        logger.info("user %s logged in", session_user.user_id)
        return ok(user=container.user_service.get(session_user.user_id).public_view())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    @domain_errors
    def me():
        actor = current_user(users)
        company = container.company_service.get()
        return ok(
            user=actor.public_view(),
            navigation=container.dashboard_service.navigation(actor=actor),
            company={"name": company.name, "theme": company.theme},
            has_punch_card=policy.has_punch_card(actor.role),
            can_edit_profile=policy.can_edit_own_profile(actor.role),
        )

    @app.route("/api/users", methods=["GET"], endpoint="users_directory")
    @login_required
    @domain_errors
    def users_directory():
        current_user(users)
        return jsonify([u.public_view() for u in container.user_service.list_users()])

    @app.route("/api/roles", methods=["GET"], endpoint="role_management")
    @login_required
    @domain_errors
    def role_management():
        actor = current_user(users)
        return ok(
            users=container.user_service.list_manageable(actor=actor),
            assignable_roles=[r.value for r in policy.assignable_roles(actor.role)],
        )

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @login_required
    @domain_errors
    def create_user():
        actor = current_user(users)
        data = json_body()
        user = container.user_service.create_user(
            actor=actor,
            name=text_field(data, "name"),
            email=text_field(data, "email"),
            role=parse_enum(Role, data.get("role"), "role"),
            department=text_field(data, "department"),
            password=text_field(data, "password"),
        )
        return ok(user=user.public_view()), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @login_required
    @domain_errors
    def update_user(user_id: str):
        actor = current_user(users)
        data = json_body()
        user = container.user_service.update_user(
            actor=actor,
            user_id=user_id,
            name=text_field(data, "name"),
            email=text_field(data, "email"),
            role=parse_enum(Role, data.get("role"), "role"),
            department=text_field(data, "department"),
            password=text_field(data, "password"),
        )
        return ok(user=user.public_view())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @login_required
    @domain_errors
    def delete_user(user_id: str):
        container.user_service.delete_user(actor=current_user(users), user_id=user_id)
        return ok()

    @app.route("/api/users/<user_id>/password", methods=["POST"], endpoint="reset_password")
    @login_required
    @domain_errors
    def reset_password(user_id: str):
        container.user_service.reset_password(
            actor=current_user(users),
            user_id=user_id,
            new_password=text_field(json_body(), "password"),
        )
        return ok(message="Password updated successfully")

    @app.route("/api/profile", methods=["PUT"], endpoint="update_profile")
    @login_required
    @domain_errors
    def update_profile():
        data = json_body()
        user = container.user_service.update_profile(
            actor=current_user(users),
            name=text_field(data, "name"),
            avatar=text_field(data, "avatar"),
        )
        session["name"] = user.name
        return ok(user=user.public_view())

    @app.route("/api/company", methods=["PUT"], endpoint="update_company")
    @login_required
    @domain_errors
    def update_company():
        data = json_body()
        profile = container.company_service.update_branding(
            actor=current_user(users),
            name=text_field(data, "name", None),
            theme=text_field(data, "theme", None),
        )
        return ok(company={"name": profile.name, "theme": profile.theme})
