from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from src.writer_desk.writer_desk.assignments.lifecycle import apply_status_transition
from src.writer_desk.writer_desk.assignments.status import is_active, normalize_status, status_rank

from fakes import make_assignment

NOW = datetime(2026, 2, 10, 15, 30)


def test_completing_stamps_completed_at():
    before = make_assignment(status="Pending")
    after = apply_status_transition(before, replace(before, status="Completed"), now=NOW)
    assert after.completed_at == NOW


def test_reopening_clears_completed_at():
    before = make_assignment(status="Completed", completed_at=NOW)
    after = apply_status_transition(before, replace(before, status="Pending"), now=datetime(2026, 2, 11))
    assert after.completed_at is None


def test_existing_completion_time_is_kept():
    earlier = datetime(2026, 2, 1, 8, 0)
    before = make_assignment(status="In Progress")
    after = apply_status_transition(before, replace(before, status="completed", completed_at=earlier), now=NOW)
    assert after.completed_at == earlier


def test_unchanged_status_leaves_record_alone():
    before = make_assignment(status="Completed", completed_at=None)
    edited = replace(before, title="Renamed")
    assert apply_status_transition(before, edited, now=NOW) is edited


def test_create_counts_as_status_change():
    created = apply_status_transition(None, make_assignment(status="Completed"), now=NOW)
    assert created.completed_at == NOW

    pending = apply_status_transition(None, make_assignment(status="Pending", completed_at=NOW), now=NOW)
    assert pending.completed_at is None


def test_status_helpers_ignore_case_and_spaces():
    assert normalize_status("  In Progress ") == "in progress"
    assert status_rank("COMPLETED") == 3
    assert status_rank("in progress") == 2
    assert status_rank("Under Review") == 1
    assert status_rank(None) == 1
    assert is_active("Pending") and not is_active("cancelled")
