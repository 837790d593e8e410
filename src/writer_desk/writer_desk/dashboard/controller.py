from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_role, current_writer_id, login_required
from ..common.http import api_view
from ..container import Container
from .schema import dashboard_to_json, leaderboard_to_json


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/api/writer-dashboard/leaderboard", methods=["GET"], endpoint="writer_leaderboard")
    @login_required
    @api_view
    def leaderboard():
        return jsonify(leaderboard_to_json(service.leaderboard()))

    @app.route("/api/writer-dashboard/dashboard/<int:writer_id>", methods=["GET"], endpoint="writer_dashboard")
    @login_required
    @api_view
    def writer_dashboard(writer_id: int):
        service.authorize_view(
            current_role=current_role(),
            current_writer_id=current_writer_id(),
            writer_id=writer_id,
        )
        return jsonify(dashboard_to_json(service.build_writer_dashboard(writer_id)))
