from __future__ import annotations

from flask import Flask, jsonify

from ..auth.decorators import admin_required
from ..common.http import json_body, json_error
from ..common.validators import as_bool
from ..container import Container
from ..core.exceptions import DomainError, StorageError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_all")
    @admin_required
    def attendance_all():
        try:
            return jsonify(container.attendance_service.attendance_map())
        except StorageError as e:
            app.logger.error("Error reading attendance: %s", e)
            return json_error(e)

    @app.route("/api/attendance/<session_id>", methods=["GET"], endpoint="attendance_roster")
    @admin_required
    def attendance_roster(session_id: str):
        try:
            return jsonify(container.report_service.session_summary(session_id))
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/attendance/<session_id>/<member_id>", methods=["PUT"], endpoint="attendance_upsert")
    @admin_required
    def attendance_upsert(session_id: str, member_id: str):
        try:
            data = json_body()
            view = container.attendance_service.upsert_record(
                session_id=session_id,
                member_id=member_id,
                registered=as_bool(data.get("registered", False)),
                attended=as_bool(data.get("attended", False)),
                notes=data.get("notes"),
            )
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            app.logger.warning("Error updating attendance %s/%s: %s", session_id, member_id, e)
            return json_error(e)

    @app.route("/api/attendance/<session_id>/<member_id>", methods=["DELETE"], endpoint="attendance_delete")
    @admin_required
    def attendance_delete(session_id: str, member_id: str):
        try:
            removed = container.attendance_service.remove_record(session_id=session_id, member_id=member_id)
            return jsonify({"success": True, "removed": removed})
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/attendance/<session_id>/<member_id>/add", methods=["POST"], endpoint="attendance_add")
    @admin_required
    def attendance_add(session_id: str, member_id: str):
        try:
            view = container.attendance_service.admin_add(session_id=session_id, member_id=member_id)
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            return json_error(e)
