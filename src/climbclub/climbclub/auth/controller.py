from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.http import json_body, json_error
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        try:
            data = json_body()
            role = container.auth_service.authenticate_admin(str(data.get("password") or ""))

            session.permanent = bool(data.get("remember"))
            app.permanent_session_lifetime = timedelta(days=7)
            session["role"] = role.value

            app.logger.info("admin logged in")
            return jsonify({"success": True, "role": role.value})
        except DomainError as e:
            app.logger.warning("failed admin login")
            return json_error(e)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    def auth_me():
        return jsonify({"role": session.get("role", Role.MEMBER.value)})
