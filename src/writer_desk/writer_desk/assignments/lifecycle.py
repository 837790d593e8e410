from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from .model import Assignment
from .status import is_completed


def apply_status_transition(before: Optional[Assignment], after: Assignment, *, now: datetime) -> Assignment:
    """Keep ``completed_at`` set exactly while the status is a completed variant.

    Runs before the write; a create (``before`` is None) always counts as a
    status change. An existing completion time survives re-completion.
    """

    if before is not None and before.status == after.status:
        return after

    if is_completed(after.status):
        if after.completed_at is None:
            return replace(after, completed_at=now)
        return after

    if after.completed_at is not None:
        return replace(after, completed_at=None)
    return after
