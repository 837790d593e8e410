"""JSON helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_CODES:
        if isinstance(error, error_type):
            return status
    return 400


def json_body() -> Any:
    """Request JSON, or an empty dict when the body is missing or not JSON."""
    body = request.get_json(silent=True)
    return {} if body is None else body


def api_view(view):
    """Turn domain errors into ``{"error": ...}`` responses; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e), status_for(e))
        except Exception as e:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            body: dict[str, Any] = {"error": "Internal server error"}
            if bool(current_app.config.get("DEBUG", False)):
                body["message"] = str(e)
            return jsonify(body), 500

    return wrapper


def json_field(name: str) -> Any:
    body = json_body()
    return body.get(name) if isinstance(body, dict) else None
