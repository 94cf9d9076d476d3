from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required
from ..common.http import json_error
from ..container import Container
from ..core.exceptions import DomainError, StorageError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route("/api/data", methods=["GET"], endpoint="data_export")
    @admin_required
    def data_export():
        try:
            return jsonify(container.data_service.export_document())
        except StorageError as e:
            app.logger.error("Error reading data: %s", e)
            return json_error(e)

    @app.route("/api/data", methods=["PUT"], endpoint="data_import")
    @admin_required
    def data_import():
        try:
            counts = container.data_service.import_document(request.get_json(silent=True))
            return jsonify({"success": True, **counts})
        except (DomainError, StorageError) as e:
            app.logger.error("Error writing data: %s", e)
            return json_error(e)
