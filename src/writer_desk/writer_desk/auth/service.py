from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_phone
from ..core.constants import DEFAULT_ADMIN_SESSION_HOURS, DEFAULT_WRITER_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..writers.repository import WriterRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    role: Role
    expires_at: datetime
    writer_id: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    level: Optional[str] = None
    points: int = 0


class AuthService:
    """Use case: admin password login and writer phone login."""

    def __init__(
        self,
        writers: WriterRepository,
        *,
        admin_password_hash: str,
        writer_session_days: int = DEFAULT_WRITER_SESSION_DAYS,
        admin_session_hours: int = DEFAULT_ADMIN_SESSION_HOURS,
    ):
        self._writers = writers
        self._admin_password_hash = admin_password_hash
        self._writer_session = timedelta(days=int(writer_session_days))
        self._admin_session = timedelta(hours=int(admin_session_hours))

    def authenticate_admin(self, password: Optional[str], *, now: datetime | None = None) -> SessionUser:
        now = now or now_local()
        if not password or not check_password_hash(self._admin_password_hash, password):
            raise AuthenticationError("Invalid password")
        return SessionUser(role=Role.ADMIN, expires_at=now + self._admin_session)

    def authenticate_writer(self, phone: Optional[str], *, now: datetime | None = None) -> SessionUser:
        """Phone-only login (no OTP); stamps the writer's last-active time."""

        now = now or now_local()
        phone = require_phone(phone)

        writer = self._writers.get_by_phone(phone)
        if not writer:
            raise AuthenticationError(
                "Unauthorized: Mobile number not registered. Please contact the administrator."
            )
        self._writers.touch_last_active(writer.writer_id, now)

        return SessionUser(
            role=Role.WRITER,
            expires_at=now + self._writer_session,
            writer_id=writer.writer_id,
            name=writer.name,
            phone=writer.phone,
            level=writer.level,
            points=writer.points,
        )
