from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Optional

from flask import session

from ..common.datetime_utils import format_datetime, now_local, parse_datetime
from ..common.http import json_error
from ..core.enums import Role
from .service import SessionUser


def start_session(user: SessionUser) -> None:
    session.clear()
    session.permanent = True
    session["role"] = user.role.value
    session["expires_at"] = format_datetime(user.expires_at)
    if user.writer_id is not None:
        session["writer_id"] = user.writer_id
        session["name"] = user.name


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def current_writer_id() -> Optional[int]:
    writer_id = session.get("writer_id")
    return int(writer_id) if writer_id is not None else None


def _session_expired(now: datetime | None = None) -> bool:
    try:
        expires_at = parse_datetime(session.get("expires_at"))
    except ValueError:
        return True
    return expires_at is None or expires_at <= (now or now_local())


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_role() is None:
            return json_error("Authentication required", 401)
        if _session_expired():
            session.clear()
            return json_error("Invalid or expired session", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_role() is None:
            return json_error("Authentication required", 401)
        if _session_expired():
            session.clear()
            return json_error("Invalid or expired session", 401)
        if current_role() != Role.ADMIN:
            return json_error("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper
