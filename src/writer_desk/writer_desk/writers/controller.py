from __future__ import annotations

from flask import Flask, jsonify

from ..achievements.schema import achievement_to_json
from ..auth.guards import admin_required
from ..common.http import api_view, json_body
from ..container import Container
from .schema import writer_to_json


def register(app: Flask, container: Container) -> None:
    service = container.writer_service

    @app.route("/api/writers", methods=["GET"], endpoint="list_writers")
    @admin_required
    @api_view
    def list_writers():
        return jsonify([writer_to_json(w) for w in service.list_writers()])

    @app.route("/api/writers", methods=["POST"], endpoint="create_writer")
    @admin_required
    @api_view
    def create_writer():
        return jsonify(writer_to_json(service.create_writer(json_body()))), 201

    @app.route("/api/writers/<int:writer_id>", methods=["PUT"], endpoint="update_writer")
    @admin_required
    @api_view
    def update_writer(writer_id: int):
        return jsonify(writer_to_json(service.update_writer(writer_id, json_body())))

    @app.route("/api/writers/<int:writer_id>", methods=["DELETE"], endpoint="delete_writer")
    @admin_required
    @api_view
    def delete_writer(writer_id: int):
        service.delete_writer(writer_id)
        return jsonify({"success": True})

    @app.route("/api/writers/<int:writer_id>/achievements", methods=["POST"], endpoint="award_achievement")
    @admin_required
    @api_view
    def award_achievement(writer_id: int):
        achievement = container.achievement_service.award(writer_id, json_body())
        return jsonify(achievement_to_json(achievement)), 201
