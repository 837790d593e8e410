from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import admin_required
from ..common.http import api_view, json_body
from ..container import Container
from .schema import import_counts_to_json


def register(app: Flask, container: Container) -> None:
    service = container.transfer_service

    @app.route("/api/bulk-import", methods=["POST"], endpoint="bulk_import")
    @admin_required
    @api_view
    def bulk_import():
        counts = service.bulk_import(json_body())
        return jsonify({"success": True, "imported": import_counts_to_json(counts)})

    @app.route("/api/export", methods=["GET"], endpoint="export_all")
    @admin_required
    @api_view
    def export_all():
        return jsonify(service.export_all())

    @app.route("/api/clear-all", methods=["POST"], endpoint="clear_all")
    @admin_required
    @api_view
    def clear_all():
        service.clear_all()
        return jsonify({"success": True, "message": "All data cleared"})
