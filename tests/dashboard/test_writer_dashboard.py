from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.writer_desk.writer_desk.core.enums import AchievementType, Role
from src.writer_desk.writer_desk.core.exceptions import AuthorizationError, NotFoundError
from src.writer_desk.writer_desk.dashboard.metrics import average_rating, percentage
from src.writer_desk.writer_desk.dashboard.schema import dashboard_to_json
from src.writer_desk.writer_desk.dashboard.service import WriterDashboardService

from fakes import make_assignment

DEADLINE = datetime(2026, 3, 1, 12, 0)


@pytest.fixture
def service(store):
    return WriterDashboardService(store.writers, store.assignments, store.achievements)


def _four_assignments(store):
    store.assignments.create(
        make_assignment(
            assignment_id="a1",
            writer_id=1,
            status="Completed",
            completed_at=DEADLINE - timedelta(days=1),
            writer_price=100,
            writer_paid_amount=100,
            created_at=datetime(2026, 2, 1),
        )
    )
    store.assignments.create(
        make_assignment(
            assignment_id="a2",
            writer_id=1,
            status="completed",
            completed_at=DEADLINE + timedelta(days=1),
            writer_price=50,
            writer_paid_amount=None,
            created_at=datetime(2026, 2, 2),
        )
    )
    store.assignments.create(
        make_assignment(
            assignment_id="a3",
            writer_id=1,
            status="In Progress",
            writer_price=80,
            writer_paid_amount=30,
            created_at=datetime(2026, 2, 3),
        )
    )
    store.assignments.create(
        make_assignment(assignment_id="a4", writer_id=1, status="Cancelled", created_at=datetime(2026, 2, 4))
    )


def test_rates_are_computed_from_live_assignments(service, store):
    _four_assignments(store)
    # Cached counters are deliberately wrong.
    store.writers.update(1, {"completed_assignments": 9, "on_time_deliveries": 9})

    d = service.build_writer_dashboard(1)

    assert d.performance.completion_rate == 50
    assert d.performance.on_time_rate == 50
    assert d.performance.total_earnings == 150
    assert d.performance.total_paid == 130
    assert d.performance.pending_payment == 20
    assert (d.counts.total, d.counts.active, d.counts.completed) == (4, 1, 2)


def test_writer_without_assignments_gets_zero_rates(service):
    d = service.build_writer_dashboard(2)
    assert d.performance.completion_rate == 0
    assert d.performance.on_time_rate == 0
    assert d.performance.total_earnings == 0


def test_missing_writer_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.build_writer_dashboard(404)


def test_points_fall_back_to_earnings(service, store):
    _four_assignments(store)
    assert service.build_writer_dashboard(1).points == 150

    store.writers.update(1, {"points": 7})
    assert service.build_writer_dashboard(1).points == 7


def test_json_shape_hides_client_fields_and_lists_newest_first(service, store):
    _four_assignments(store)
    store.assignments.create(make_assignment(assignment_id="open1", writer_id=None, status="Pending"))
    store.assignments.create(make_assignment(assignment_id="open2", writer_id=None, status="In Progress"))
    store.achievements.create(
        writer_id=1,
        achievement_type=AchievementType.SPEED_DEMON,
        description="Five early deliveries",
        awarded_at=datetime(2026, 2, 5),
    )

    body = dashboard_to_json(service.build_writer_dashboard(1))

    assert [a["id"] for a in body["assignments"]] == ["a4", "a3", "a2", "a1"]
    assert "price" not in body["assignments"][0]
    assert "studentId" not in body["assignments"][0]
    assert [a["id"] for a in body["availableAssignments"]] == ["open1"]
    assert body["achievements"][0]["achievementType"] == "SpeedDemon"
    assert body["stats"] == {"total": 4, "active": 1, "completed": 2}
    assert body["performance"]["completionRate"] == 50


def test_rates_round_half_up():
    assert percentage(1, 8) == 13
    assert percentage(5, 200) == 3
    assert percentage(1, 3) == 33
    assert percentage(0, 0) == 0


def test_average_rating_accepts_legacy_shapes():
    assert average_rating({"quality": 4.5, "count": 2}) == 4.5
    assert average_rating(3.8) == 3.8
    assert average_rating("4") == 4.0
    assert average_rating(None) == 0
    assert average_rating({"punctuality": 5}) == 0
    assert average_rating([1, 2]) == 0


def test_writer_may_only_view_own_dashboard():
    WriterDashboardService.authorize_view(current_role=Role.WRITER, current_writer_id=3, writer_id=3)
    WriterDashboardService.authorize_view(current_role=Role.ADMIN, current_writer_id=None, writer_id=3)

    with pytest.raises(AuthorizationError):
        WriterDashboardService.authorize_view(current_role=Role.WRITER, current_writer_id=4, writer_id=3)
    with pytest.raises(AuthorizationError):
        WriterDashboardService.authorize_view(current_role=None, current_writer_id=None, writer_id=3)


def test_leaderboard_ranks_completed_earnings(service, store):
    store.assignments.create(make_assignment(assignment_id="x1", writer_id=1, status="Completed", writer_price=10.5))
    store.assignments.create(make_assignment(assignment_id="x2", writer_id=2, status="Completed", writer_price=99.4))
    store.assignments.create(make_assignment(assignment_id="x3", writer_id=2, status="Pending", writer_price=1000))
    store.assignments.create(make_assignment(assignment_id="x4", writer_id=7, status="Completed", writer_price=5))

    entries = service.leaderboard()

    assert [(e.name, e.total_earnings) for e in entries] == [
        ("Writer 2", 99),
        ("Writer 1", 11),
        ("Unknown Writer", 5),
    ]
