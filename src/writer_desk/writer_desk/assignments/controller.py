from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import admin_required
from ..common.http import api_view, json_body
from ..container import Container
from .schema import assignment_to_json


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/api/assignments", methods=["GET"], endpoint="list_assignments")
    @admin_required
    @api_view
    def list_assignments():
        return jsonify([assignment_to_json(a) for a in service.list_assignments()])

    @app.route("/api/assignments", methods=["POST"], endpoint="create_assignment")
    @admin_required
    @api_view
    def create_assignment():
        return jsonify(assignment_to_json(service.create(json_body()))), 201

    @app.route("/api/assignments/<assignment_id>", methods=["PUT"], endpoint="update_assignment")
    @admin_required
    @api_view
    def update_assignment(assignment_id: str):
        return jsonify(assignment_to_json(service.update(assignment_id, json_body())))

    @app.route("/api/assignments/<assignment_id>", methods=["DELETE"], endpoint="delete_assignment")
    @admin_required
    @api_view
    def delete_assignment(assignment_id: str):
        service.delete(assignment_id)
        return jsonify({"success": True})
