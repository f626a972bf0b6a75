from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user, domain_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    users = container.users_repo
    service = container.dashboard_service

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @domain_errors
    def dashboard():
        return ok(**service.overview(actor=current_user(users)))

    @app.route("/api/navigation", methods=["GET"], endpoint="navigation")
    @login_required
    @domain_errors
    def navigation():
        return jsonify(service.navigation(actor=current_user(users)))

    @app.route("/api/search", methods=["GET"], endpoint="global_search")
    @login_required
    @domain_errors
    def global_search():
        return jsonify(service.search(actor=current_user(users), query=request.args.get("q", "")))
