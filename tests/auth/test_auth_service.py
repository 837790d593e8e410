from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.writer_desk.writer_desk.auth.service import AuthService
from src.writer_desk.writer_desk.core.enums import Role
from src.writer_desk.writer_desk.core.exceptions import AuthenticationError, ValidationError

NOW = datetime(2026, 2, 10, 15, 30)


@pytest.fixture
def service(store):
    return AuthService(store.writers, admin_password_hash=generate_password_hash("s3cret"))


def test_admin_login_checks_password_hash(service):
    user = service.authenticate_admin("s3cret", now=NOW)
    assert user.role == Role.ADMIN
    assert user.expires_at == NOW + timedelta(hours=24)

    with pytest.raises(AuthenticationError, match="Invalid password"):
        service.authenticate_admin("wrong")
    with pytest.raises(AuthenticationError):
        service.authenticate_admin(None)


def test_writer_login_by_phone_stamps_last_active(service, store):
    user = service.authenticate_writer("9876543201", now=NOW)

    assert user.role == Role.WRITER
    assert user.writer_id == 1
    assert user.expires_at == NOW + timedelta(days=30)
    assert store.writers.get_by_id(1).last_active == NOW


def test_writer_login_requires_ten_digits(service):
    with pytest.raises(ValidationError, match="10-digit"):
        service.authenticate_writer("12345")


def test_unknown_phone_is_unauthorized(service):
    with pytest.raises(AuthenticationError, match="not registered"):
        service.authenticate_writer("1112223333")
