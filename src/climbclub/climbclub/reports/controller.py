from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..auth.decorators import admin_required
from ..common.datetime_utils import timestamp
from ..common.http import json_error
from ..container import Container
from ..core.exceptions import DomainError, StorageError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/stats", methods=["GET"], endpoint="reports_stats")
    def reports_stats():
        try:
            return jsonify(asdict(container.report_service.club_stats()))
        except StorageError as e:
            app.logger.error("Error building stats: %s", e)
            return json_error(e)

    @app.route("/api/reports/export/<kind>.csv", methods=["GET"], endpoint="reports_export")
    @admin_required
    def reports_export(kind: str):
        try:
            content = container.report_service.export_csv(kind)
        except (DomainError, StorageError) as e:
            return json_error(e)

        filename = f"climbclub-{kind}-{timestamp()}.csv"
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
