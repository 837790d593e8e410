from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..assignments.model import Assignment


def finish_time(a: Assignment) -> Optional[datetime]:
    """When the work was delivered.

    Rows completed before completion tracking existed have no ``completed_at``;
    their last modification time stands in for it.
    """
    return a.completed_at or a.updated_at


def is_on_time(a: Assignment) -> bool:
    """Delivered no later than the deadline (the boundary itself is on time)."""
    finished = finish_time(a)
    if finished is None or a.deadline is None:
        return False
    return finished <= a.deadline
