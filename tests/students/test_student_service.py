from __future__ import annotations

from datetime import datetime

import pytest

from src.writer_desk.writer_desk.core.exceptions import NotFoundError, ValidationError
from src.writer_desk.writer_desk.students.service import StudentService

from fakes import make_assignment

NOW = datetime(2026, 2, 10, 15, 30)


@pytest.fixture
def service(store, reconciler):
    ids = iter(["stu000001", "stu000002", "stu000003"])
    return StudentService(store.students, store.assignments, reconciler, id_factory=lambda: next(ids))


def test_create_student_gets_fresh_id(service):
    created = service.create_student(
        {"name": " Ben ", "email": "ben@example.com", "phone": "5551112222", "isFlagged": "true"},
        now=NOW,
    )

    assert created.student_id == "stu000002"
    assert created.name == "Ben"
    assert created.is_flagged is True
    assert created.created_at == NOW


def test_create_requires_contact_fields(service):
    with pytest.raises(ValidationError, match="email is required"):
        service.create_student({"name": "Ben", "phone": "5551112222"})


def test_referrer_must_exist_and_differ(service):
    referred = service.create_student(
        {"name": "Ben", "email": "b@example.com", "phone": "1", "referredBy": "stu000001"}
    )
    assert referred.referred_by == "stu000001"

    with pytest.raises(ValidationError, match="Referring student not found"):
        service.create_student({"name": "Cy", "email": "c@example.com", "phone": "2", "referredBy": "ghost"})
    with pytest.raises(ValidationError, match="cannot refer themselves"):
        service.update_student("stu000001", {"referredBy": "stu000001"})


def test_update_missing_student_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_student("ghost", {"name": "x"})


def test_delete_cascades_and_reconciles_affected_writers(service, store, reconciler):
    store.assignments.create(make_assignment(assignment_id="a1", writer_id=1))
    store.assignments.create(make_assignment(assignment_id="a2", writer_id=2, status="Completed"))
    store.assignments.create(make_assignment(assignment_id="a3", writer_id=2, student_id="other"))
    reconciler.recompute(1)
    reconciler.recompute(2)
    assert store.writers.get_by_id(2).total_assignments == 2

    service.delete_student("stu000001")

    assert store.students.get_by_id("stu000001") is None
    assert [a.assignment_id for a in store.assignments.rows] == ["a3"]
    assert store.writers.get_by_id(1).total_assignments == 0
    assert store.writers.get_by_id(2).total_assignments == 1
    assert store.writers.get_by_id(2).completed_assignments == 0
