from __future__ import annotations

import importlib
import logging
from typing import Optional

import httpx
from dotenv import load_dotenv
from flask import Flask, jsonify

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .chat.controller import register as register_chat
from .config import get_settings_module
from .container import build_container
from .dashboard.controller import register as register_dashboard
from .leads.controller import register as register_leads
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, http_client: Optional[httpx.Client] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    container = build_container(
        gemini_api_key=getattr(settings, "GEMINI_API_KEY", ""),
        gemini_model=getattr(settings, "GEMINI_MODEL", "gemini-2.5-flash"),
        ai_timeout=float(getattr(settings, "AI_TIMEOUT_SECONDS", 30)),
        company_name=getattr(settings, "COMPANY_NAME", ""),
        seed_demo_data=bool(getattr(settings, "SEED_DEMO_DATA", False)),
        http_client=http_client,
    )
    app.extensions["hr_panel"] = container

    if app.config["DEBUG"]:
        logger.info(
            "settings=%s users=%d ai=%s",
            settings_module,
            len(container.users_repo.list_all()),
            "on" if container.ai_client.enabled else "off",
        )

    register_users(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)
    register_leads(app, container)
    register_chat(app, container)
    register_announcements(app, container)
    register_dashboard(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
