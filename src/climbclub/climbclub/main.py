from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.security import generate_password_hash

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import build_container
from .database.bootstrap import ensure_data_file
from .database.controller import register as register_data
from .members.controller import register as register_members
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions


def _admin_password_hash(settings: dict) -> str:
    configured = settings.get("ADMIN_PASSWORD_HASH")
    if configured:
        return str(configured)
    password = settings.get("ADMIN_PASSWORD")
    return generate_password_hash(str(password)) if password else ""


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    settings.update(overrides or {})

    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["DATA_FILE"] = str(settings["DATA_FILE"])
    app.json.sort_keys = False
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    if app.config["DEBUG"]:
        app.logger.setLevel(logging.DEBUG)
        app.logger.debug("[climbclub] settings=%s data_file=%s", settings_module, app.config["DATA_FILE"])

    container = build_container(
        data_config={"data_file": app.config["DATA_FILE"]},
        admin_password_hash=_admin_password_hash(settings),
    )
    if not settings.get("ADMIN_PASSWORD_HASH") and not settings.get("ADMIN_PASSWORD"):
        app.logger.warning("[climbclub] no admin password configured; admin login is disabled")

    if ensure_data_file(container.conn, seed=bool(settings.get("AUTO_SEED_DATA", False))):
        app.logger.info("[climbclub] created data file %s", container.conn.path)

    register_auth(app, container)
    register_data(app, container)
    register_members(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.name, "message": e.description}), e.code
        app.logger.exception("Unhandled error")
        return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500

    return app
