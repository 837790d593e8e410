from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import admin_required
from ..common.http import api_view, json_body
from ..container import Container
from .schema import student_to_json


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @admin_required
    @api_view
    def list_students():
        return jsonify([student_to_json(s) for s in service.list_students()])

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @admin_required
    @api_view
    def create_student():
        student = service.create_student(json_body())
        return jsonify(student_to_json(student)), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @admin_required
    @api_view
    def update_student(student_id: str):
        return jsonify(student_to_json(service.update_student(student_id, json_body())))

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @admin_required
    @api_view
    def delete_student(student_id: str):
        service.delete_student(student_id)
        return jsonify({"success": True})
