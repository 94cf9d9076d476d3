from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required, is_admin
from ..common.http import json_body, json_error
from ..container import Container
from ..core.exceptions import DomainError, StorageError
from ..database.document import member_to_dict
from .model import Member


def _public_view(m: Member) -> dict:
    # Contact details stay admin-only; members only need a name to pick from.
    return {"id": m.member_id, "name": m.name}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    def members_list():
        try:
            members = container.member_service.list_members(request.args.get("q"))
            view = member_to_dict if is_admin() else _public_view
            return jsonify([view(m) for m in members])
        except StorageError as e:
            app.logger.error("Error reading members: %s", e)
            return json_error(e)

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    def members_create():
        try:
            member = container.member_service.create_member(json_body())
            return jsonify(member_to_dict(member)), 201
        except (DomainError, StorageError) as e:
            app.logger.warning("Error creating member: %s", e)
            return json_error(e)

    @app.route("/api/members/<member_id>", methods=["GET"], endpoint="members_get")
    @admin_required
    def members_get(member_id: str):
        try:
            return jsonify(member_to_dict(container.member_service.get_member(member_id)))
        except (DomainError, StorageError) as e:
            return json_error(e)

    @app.route("/api/members/<member_id>", methods=["PUT"], endpoint="members_update")
    @admin_required
    def members_update(member_id: str):
        try:
            member = container.member_service.update_member(member_id, json_body())
            return jsonify(member_to_dict(member))
        except (DomainError, StorageError) as e:
            app.logger.warning("Error updating member %s: %s", member_id, e)
            return json_error(e)

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="members_delete")
    @admin_required
    def members_delete(member_id: str):
        try:
            removed = container.member_service.delete_member(member_id)
            return jsonify({"success": True, "attendance_removed": removed})
        except (DomainError, StorageError) as e:
            app.logger.warning("Error deleting member %s: %s", member_id, e)
            return json_error(e)

    @app.route("/api/members/<member_id>/history", methods=["GET"], endpoint="members_history")
    def members_history(member_id: str):
        try:
            history = container.report_service.member_history(
                member_id,
                query=request.args.get("q"),
                filter_by=request.args.get("filter", "all"),
            )
            return jsonify({"rows": history.rows, "summary": history.summary})
        except (DomainError, StorageError) as e:
            return json_error(e)
