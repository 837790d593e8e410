from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.http import api_view, json_field
from ..container import Container
from .guards import start_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    @api_view
    def admin_login():
        user = container.auth_service.authenticate_admin(json_field("password"))
        start_session(user)
        logger.info("Admin logged in")
        return jsonify({"success": True, "role": user.role.value})

    @app.route("/api/writer-auth/login", methods=["POST"], endpoint="writer_login")
    @api_view
    def writer_login():
        user = container.auth_service.authenticate_writer(json_field("phone"))
        start_session(user)
        logger.info("Writer %s logged in", user.writer_id)
        return jsonify(
            {
                "writer": {
                    "id": user.writer_id,
                    "phone": user.phone,
                    "name": user.name,
                    "level": user.level,
                    "points": user.points,
                }
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
