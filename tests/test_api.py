from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.writer_desk.writer_desk.common.datetime_utils import format_datetime, now_local
from src.writer_desk.writer_desk.container import assemble
from src.writer_desk.writer_desk.main import create_app

from fakes import make_assignment


@pytest.fixture
def container(store):
    return assemble(
        conn=None,
        students_repo=store.students,
        writers_repo=store.writers,
        assignments_repo=store.assignments,
        achievements_repo=store.achievements,
        admin_password="admin-pass",
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _login_admin(client):
    res = client.post("/api/admin/login", json={"password": "admin-pass"})
    assert res.status_code == 200


def _login_writer(client, phone="9876543201"):
    res = client.post("/api/writer-auth/login", json={"phone": phone})
    assert res.status_code == 200
    return res.get_json()["writer"]


def test_admin_routes_require_login(client):
    res = client.get("/api/assignments")
    assert res.status_code == 401
    assert res.get_json() == {"error": "Authentication required"}


def test_wrong_admin_password_is_401(client):
    res = client.post("/api/admin/login", json={"password": "nope"})
    assert res.status_code == 401
    assert res.get_json()["error"] == "Invalid password"


def test_writer_cannot_use_admin_routes(client):
    _login_writer(client)
    assert client.get("/api/students").status_code == 403


def test_assignment_crud_round_trip(client, store):
    _login_admin(client)

    res = client.post(
        "/api/assignments",
        json={
            "studentId": "stu000001",
            "writerId": 1,
            "title": "Essay",
            "type": "Essay",
            "subject": "History",
            "level": "Undergraduate",
            "deadline": "2099-01-01T00:00:00.000Z",
        },
    )
    assert res.status_code == 201
    body = res.get_json()
    assert body["status"] == "Pending"
    assignment_id = body["id"]

    res = client.put(f"/api/assignments/{assignment_id}", json={"status": "Completed"})
    assert res.status_code == 200
    assert res.get_json()["completedAt"] is not None
    assert store.writers.get_by_id(1).completed_assignments == 1

    assert client.delete(f"/api/assignments/{assignment_id}").status_code == 200
    assert client.delete(f"/api/assignments/{assignment_id}").status_code == 404
    assert store.writers.get_by_id(1).total_assignments == 0


def test_validation_errors_are_400(client):
    _login_admin(client)
    res = client.post("/api/assignments", json={"title": "Essay"})
    assert res.status_code == 400
    assert "required" in res.get_json()["error"]


def test_unexpected_errors_are_500(client, store):
    _login_admin(client)
    store.students.list_all = None  # calling it raises TypeError

    res = client.get("/api/students")

    assert res.status_code == 500
    assert res.get_json()["error"] == "Internal server error"


def test_writer_sees_only_own_dashboard(client, store):
    store.assignments.create(make_assignment(assignment_id="a1", writer_id=1, status="Completed", writer_price=25))
    writer = _login_writer(client)

    own = client.get(f"/api/writer-dashboard/dashboard/{writer['id']}")
    assert own.status_code == 200
    assert own.get_json()["performance"]["completionRate"] == 100

    other = client.get("/api/writer-dashboard/dashboard/2")
    assert other.status_code == 403
    assert other.get_json()["error"] == "Access denied: You can only view your own dashboard"


def test_admin_dashboard_for_missing_writer_is_404(client):
    _login_admin(client)
    assert client.get("/api/writer-dashboard/dashboard/999").status_code == 404


def test_leaderboard_for_logged_in_writer(client, store):
    store.assignments.create(make_assignment(assignment_id="a1", writer_id=2, status="Completed", writer_price=12.5))
    _login_writer(client)

    res = client.get("/api/writer-dashboard/leaderboard")

    assert res.get_json() == [{"name": "Writer 2", "totalEarnings": 13}]


def test_expired_session_is_rejected(client):
    _login_admin(client)
    with client.session_transaction() as sess:
        sess["expires_at"] = format_datetime(now_local() - timedelta(minutes=1))

    assert client.get("/api/students").status_code == 401


def test_logout_clears_session(client):
    _login_admin(client)
    client.post("/api/logout")
    assert client.get("/api/students").status_code == 401


def test_award_achievement_endpoint(client):
    _login_admin(client)
    res = client.post("/api/writers/1/achievements", json={"achievementType": "QualityChampion", "description": "5 stars"})
    assert res.status_code == 201
    assert res.get_json()["achievementType"] == "QualityChampion"

    bad = client.post("/api/writers/1/achievements", json={"achievementType": "Nope", "description": "x"})
    assert bad.status_code == 400


def test_bulk_import_export_and_clear(client, store):
    _login_admin(client)
    exported = client.get("/api/export").get_json()
    assert set(exported) == {"students", "writers", "assignments"}

    assert client.post("/api/clear-all").get_json()["success"] is True
    assert store.writers.list_all() == []

    res = client.post("/api/bulk-import", json=exported)
    assert res.status_code == 200
    assert res.get_json()["imported"] == {"students": 1, "writers": 2, "assignments": 0}

    assert client.post("/api/bulk-import", json={"students": []}).status_code == 400


def test_bulk_import_without_deadline_is_rejected_whole(client, store):
    _login_admin(client)
    payload = {
        "students": [{"id": "stu000009", "name": "Eve", "email": "eve@example.com", "phone": "5550009999"}],
        "writers": [],
        "assignments": [
            {"studentId": "stu000009", "title": "Essay", "type": "Essay", "subject": "History", "level": "College"}
        ],
    }

    res = client.post("/api/bulk-import", json=payload)

    assert res.status_code == 400
    assert res.get_json()["error"] == "deadline is required"
    assert store.students.get_by_id("stu000009") is None
