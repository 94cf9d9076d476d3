from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required
from ..common.http import json_body, json_error
from ..common.validators import as_bool
from ..container import Container
from ..core.exceptions import DomainError, StorageError, ValidationError
from ..database.document import session_to_dict


def _member_id(data: dict) -> str:
    # The acting member is always explicit in the request, never taken from UI state.
    member_id = str(data.get("member_id") or "").strip()
    if not member_id:
        raise ValidationError("Missing required field: member_id")
    return member_id


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["GET"], endpoint="sessions_list")
    def sessions_list():
        try:
            sessions = container.session_service.list_sessions(
                discipline=request.args.get("discipline"),
                query=request.args.get("q"),
            )
            return jsonify([session_to_dict(s) for s in sessions])
        except StorageError as e:
            app.logger.error("Error reading sessions: %s", e)
            return json_error(e)

    @app.route("/api/sessions/upcoming", methods=["GET"], endpoint="sessions_upcoming")
    def sessions_upcoming():
        try:
            board = container.session_service.registration_board(
                query=request.args.get("q"),
                member_id=request.args.get("member_id") or None,
            )
            return jsonify(board)
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/sessions", methods=["POST"], endpoint="sessions_create")
    @admin_required
    def sessions_create():
        try:
            session = container.session_service.create_session(json_body())
            return jsonify(session_to_dict(session)), 201
        except (DomainError, StorageError) as e:
            app.logger.warning("Error creating session: %s", e)
            return json_error(e)

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="sessions_get")
    def sessions_get(session_id: str):
        try:
            session = container.session_service.get_session(session_id)
            occupancy = container.attendance_service.occupancy(session_id)
            return jsonify({**session_to_dict(session), "occupancy": occupancy.to_dict()})
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/sessions/<session_id>", methods=["PUT"], endpoint="sessions_update")
    @admin_required
    def sessions_update(session_id: str):
        try:
            session = container.session_service.update_session(session_id, json_body())
            return jsonify(session_to_dict(session))
        except (DomainError, StorageError) as e:
            app.logger.warning("Error updating session %s: %s", session_id, e)
            return json_error(e)

    @app.route("/api/sessions/<session_id>", methods=["DELETE"], endpoint="sessions_delete")
    @admin_required
    def sessions_delete(session_id: str):
        try:
            removed = container.session_service.delete_session(session_id)
            return jsonify({"success": True, "attendance_removed": removed})
        except (DomainError, StorageError) as e:
            app.logger.warning("Error deleting session %s: %s", session_id, e)
            return json_error(e)

    @app.route("/api/sessions/<session_id>/register", methods=["POST"], endpoint="sessions_register")
    def sessions_register(session_id: str):
        try:
            view = container.attendance_service.register(session_id=session_id, member_id=_member_id(json_body()))
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/sessions/<session_id>/unregister", methods=["POST"], endpoint="sessions_unregister")
    def sessions_unregister(session_id: str):
        try:
            view = container.attendance_service.unregister(session_id=session_id, member_id=_member_id(json_body()))
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/sessions/<session_id>/attend", methods=["POST"], endpoint="sessions_attend")
    def sessions_attend(session_id: str):
        try:
            data = json_body()
            view = container.attendance_service.mark_attended(
                session_id=session_id,
                member_id=_member_id(data),
                value=as_bool(data.get("attended", True)),
            )
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/sessions/<session_id>/notes", methods=["POST"], endpoint="sessions_notes")
    def sessions_notes(session_id: str):
        try:
            data = json_body()
            view = container.attendance_service.set_notes(
                session_id=session_id,
                member_id=_member_id(data),
                text=data.get("notes"),
            )
            return jsonify({"success": True, **view})
        except (DomainError, StorageError) as e:
            return json_error(e)
