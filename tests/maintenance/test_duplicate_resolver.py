from __future__ import annotations

import logging
from datetime import datetime, timedelta

from src.writer_desk.writer_desk.maintenance.duplicate_resolver import DuplicateResolver, pick_survivor

from fakes import make_assignment

TODAY = datetime(2026, 2, 10, 9, 0)
YESTERDAY = TODAY - timedelta(days=1)


def _resolver(store, reconciler, ids=None):
    if ids is None:
        return DuplicateResolver(store.assignments, reconciler)
    it = iter(ids)
    return DuplicateResolver(store.assignments, reconciler, id_factory=lambda: next(it))


def test_null_ids_get_distinct_new_ids(store, reconciler):
    store.assignments.create(make_assignment(assignment_id=None, title="A"))
    store.assignments.create(make_assignment(assignment_id="null", title="B"))

    report = _resolver(store, reconciler, ids=["same00001", "same00001", "other0001"]).run()

    new_ids = [a.assignment_id for a in store.assignments.rows]
    assert sorted(new_ids) == ["other0001", "same00001"]
    assert report.ids_assigned == {1: "same00001", 2: "other0001"}


def test_new_ids_do_not_collide_with_existing_rows(store, reconciler):
    store.assignments.create(make_assignment(assignment_id="taken0001", title="A"))
    store.assignments.create(make_assignment(assignment_id=None, title="B"))

    _resolver(store, reconciler, ids=["taken0001", "fresh0001"]).run()

    assert store.assignments.get_by_id("fresh0001").title == "B"


def test_completed_beats_more_recent_in_progress(store, reconciler):
    store.assignments.create(
        make_assignment(assignment_id="done", writer_id=1, status="Completed", updated_at=YESTERDAY)
    )
    store.assignments.create(
        make_assignment(assignment_id="busy", writer_id=1, status="In Progress", updated_at=TODAY)
    )

    report = _resolver(store, reconciler).run()

    assert [a.assignment_id for a in store.assignments.rows] == ["done"]
    assert report.kept == ["done"]
    assert report.deleted == ["busy"]


def test_equal_rank_keeps_latest_update(store, reconciler):
    store.assignments.create(make_assignment(assignment_id="old", status="Pending", updated_at=YESTERDAY))
    store.assignments.create(make_assignment(assignment_id="new", status="pending", updated_at=TODAY))
    store.assignments.create(make_assignment(assignment_id="none", status="Pending", updated_at=None))

    _resolver(store, reconciler).run()

    assert [a.assignment_id for a in store.assignments.rows] == ["new"]


def test_groups_are_keyed_by_title_writer_and_student(store, reconciler):
    store.assignments.create(make_assignment(assignment_id="w1", writer_id=1))
    store.assignments.create(make_assignment(assignment_id="w2", writer_id=2))
    store.assignments.create(make_assignment(assignment_id="s2", writer_id=1, student_id="stu000002"))

    report = _resolver(store, reconciler).run()

    assert report.duplicate_groups == 0
    assert len(store.assignments.rows) == 3


def test_deleting_duplicates_reconciles_the_writer(store, reconciler):
    store.assignments.create(make_assignment(assignment_id="a", writer_id=1, status="Completed", updated_at=TODAY))
    store.assignments.create(make_assignment(assignment_id="b", writer_id=1, status="Pending", updated_at=TODAY))
    store.writers.update(1, {"total_assignments": 2})

    _resolver(store, reconciler).run()

    assert store.writers.get_by_id(1).total_assignments == 1


def test_row_failures_are_logged_and_skipped(store, reconciler, caplog):
    store.assignments.create(make_assignment(assignment_id=None, title="A"))
    store.assignments.create(make_assignment(assignment_id=None, title="B"))
    store.assignments.create(make_assignment(assignment_id="dup1", title="C"))
    store.assignments.create(make_assignment(assignment_id="dup2", title="C"))
    store.assignments.create(make_assignment(assignment_id="dup3", title="C"))
    store.assignments.broken_rows.add(1)
    store.assignments.broken_deletes.add("dup2")

    with caplog.at_level(logging.INFO):
        report = _resolver(store, reconciler, ids=["fixed0001", "fixed0002"]).run()

    assert report.failures == 2
    assert report.ids_assigned == {2: "fixed0002"}
    assert store.assignments.rows[0].assignment_id is None
    assert len(report.deleted) == 1
    assert "Could not assign an id to row 1" in caplog.text
    assert "Could not delete duplicate dup2" in caplog.text


def test_row_repaired_meanwhile_is_skipped(store, reconciler, monkeypatch, caplog):
    store.assignments.create(make_assignment(assignment_id=None, title="A"))
    store.assignments.create(make_assignment(assignment_id=None, title="B"))
    stale = store.assignments.list_rows_with_missing_id()
    store.assignments.set_id_for_row(1, "elsewhere")
    monkeypatch.setattr(store.assignments, "list_rows_with_missing_id", lambda: stale)

    with caplog.at_level(logging.INFO):
        report = _resolver(store, reconciler, ids=["fixed0001", "fixed0002"]).run()

    assert report.ids_assigned == {2: "fixed0002"}
    assert report.failures == 0
    assert store.assignments.rows[0].assignment_id == "elsewhere"
    assert "Row 1 no longer needs an id" in caplog.text


def test_pick_survivor_prefers_rank_then_recency():
    a = make_assignment(assignment_id="a", status="In Progress", updated_at=TODAY)
    b = make_assignment(assignment_id="b", status="In Progress", updated_at=YESTERDAY)
    c = make_assignment(assignment_id="c", status="Cancelled", updated_at=TODAY + timedelta(days=5))

    keep, drop = pick_survivor([b, c, a])

    assert keep.assignment_id == "a"
    assert {d.assignment_id for d in drop} == {"b", "c"}
