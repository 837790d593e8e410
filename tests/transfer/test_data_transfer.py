from __future__ import annotations

from datetime import datetime

import pytest

from src.writer_desk.writer_desk.core.enums import AchievementType
from src.writer_desk.writer_desk.core.exceptions import ValidationError
from src.writer_desk.writer_desk.transfer.service import DataTransferService
from src.writer_desk.writer_desk.writers.service import WriterService

from fakes import make_assignment

NOW = datetime(2026, 2, 10, 15, 30)


@pytest.fixture
def service(store, reconciler):
    return DataTransferService(
        store.students,
        store.writers,
        store.assignments,
        store.achievements,
        reconciler,
        WriterService(store.writers),
    )


def _backup():
    return {
        "students": [{"id": "stu000009", "name": "Eve", "email": "eve@example.com", "phone": "5550009999"}],
        "writers": [
            {"id": 1, "name": "Writer One", "phone": "9876543201", "totalAssignments": 50},
            {"id": 3, "name": "New", "phone": "9876543202"},
        ],
        "assignments": [
            {
                "id": "imp000001",
                "studentId": "stu000009",
                "writerId": 1,
                "title": "Lab report",
                "type": "Report",
                "subject": "Chemistry",
                "level": "Undergraduate",
                "deadline": "2026-03-01T12:00:00.000",
                "status": "Completed",
                "completedAt": "2026-02-20T10:00:00.000",
                "writerPrice": 40,
            },
            {
                "studentId": "stu000009",
                "title": "Untitled",
                "type": "Essay",
                "subject": "History",
                "level": "High School",
                "deadline": "2026-03-05T09:00:00.000",
                "status": "Pending",
            },
        ],
    }


def test_import_upserts_and_reconciles_referenced_writers(service, store):
    counts = service.bulk_import(_backup(), now=NOW)

    assert (counts.students, counts.writers, counts.assignments) == (1, 2, 2)
    w1 = store.writers.get_by_id(1)
    assert w1.name == "Writer One"
    assert (w1.total_assignments, w1.completed_assignments, w1.on_time_deliveries) == (1, 1, 1)

    imported = store.assignments.get_by_id("imp000001")
    assert imported.completed_at == datetime(2026, 2, 20, 10, 0)

    generated = [a for a in store.assignments.rows if a.title == "Untitled"][0]
    assert generated.assignment_id
    assert generated.created_at == NOW


def test_import_gives_clashing_phone_a_placeholder(service, store):
    counts = service.bulk_import(_backup(), now=NOW)

    assert counts.writers == 2
    # 9876543202 still belongs to writer 2, who is not part of the import.
    assert store.writers.get_by_id(3).phone == "0000000001"
    assert store.writers.get_by_id(1).phone == "9876543201"


def test_import_rejects_malformed_payload(service):
    with pytest.raises(ValidationError, match="Invalid data format"):
        service.bulk_import({"students": [], "writers": []})
    with pytest.raises(ValidationError, match="Invalid data format"):
        service.bulk_import([1, 2, 3])


def _assert_nothing_written(store):
    assert [s.student_id for s in store.students.list_all()] == ["stu000001"]
    assert [w.writer_id for w in store.writers.list_all()] == [1, 2]
    assert store.writers.get_by_id(1).name != "Writer One"
    assert store.assignments.rows == []


def test_import_without_deadline_writes_nothing(service, store):
    payload = _backup()
    del payload["assignments"][1]["deadline"]

    with pytest.raises(ValidationError, match="deadline is required"):
        service.bulk_import(payload, now=NOW)

    _assert_nothing_written(store)


@pytest.mark.parametrize("field", ["type", "subject", "level"])
def test_import_rejects_blank_required_fields(service, store, field):
    payload = _backup()
    payload["assignments"][0][field] = "  "

    with pytest.raises(ValidationError, match=f"{field} is required"):
        service.bulk_import(payload, now=NOW)

    _assert_nothing_written(store)


def test_import_rejects_unknown_student(service, store):
    payload = _backup()
    payload["assignments"][1]["studentId"] = "stu999999"

    with pytest.raises(ValidationError, match="Student not found: stu999999"):
        service.bulk_import(payload, now=NOW)

    _assert_nothing_written(store)


def test_import_rejects_unknown_writer(service, store):
    payload = _backup()
    payload["assignments"][0]["writerId"] = 42

    with pytest.raises(ValidationError, match="Writer not found: 42"):
        service.bulk_import(payload, now=NOW)

    _assert_nothing_written(store)


def test_import_may_reference_rows_already_stored(service, store):
    payload = _backup()
    payload["assignments"][1].update(studentId="stu000001", writerId=2)

    counts = service.bulk_import(payload, now=NOW)

    assert counts.assignments == 2
    assert store.writers.get_by_id(2).total_assignments == 1


def test_export_round_trips_through_import(service, store):
    store.assignments.create(make_assignment(assignment_id="a1", writer_id=1, status="Completed", completed_at=NOW))
    exported = service.export_all()

    assert [s["id"] for s in exported["students"]] == ["stu000001"]
    assert [w["id"] for w in exported["writers"]] == [1, 2]
    assert exported["assignments"][0]["completedAt"] == "2026-02-10T15:30:00.000"

    service.clear_all()
    service.bulk_import(exported, now=NOW)

    restored = store.assignments.get_by_id("a1")
    assert restored.completed_at == NOW
    assert store.writers.get_by_id(1).completed_assignments == 1


def test_clear_all_empties_every_table(service, store):
    store.assignments.create(make_assignment(writer_id=1))
    store.achievements.create(
        writer_id=1, achievement_type=AchievementType.PERFECTIONIST, description="x", awarded_at=NOW
    )

    service.clear_all()

    assert store.assignments.rows == []
    assert store.achievements.rows == []
    assert store.writers.list_all() == []
    assert store.students.list_all() == []
