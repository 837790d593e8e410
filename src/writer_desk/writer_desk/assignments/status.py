"""Status predicates over the free-text ``status`` column.

Historic rows carry lowercase variants ("completed", "in progress"), so every
comparison goes through ``normalize_status``.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import AssignmentStatus

COMPLETED = AssignmentStatus.COMPLETED.value.lower()
IN_PROGRESS = AssignmentStatus.IN_PROGRESS.value.lower()
PENDING = AssignmentStatus.PENDING.value.lower()
CANCELLED = AssignmentStatus.CANCELLED.value.lower()

_RANKS = {COMPLETED: 3, IN_PROGRESS: 2}


def normalize_status(status: Optional[str]) -> str:
    return (status or "").strip().lower()


def is_completed(status: Optional[str]) -> bool:
    return normalize_status(status) == COMPLETED


def is_cancelled(status: Optional[str]) -> bool:
    return normalize_status(status) == CANCELLED


def is_active(status: Optional[str]) -> bool:
    return not (is_completed(status) or is_cancelled(status))


def status_rank(status: Optional[str]) -> int:
    """Completed (3) > In Progress (2) > anything else (1)."""
    return _RANKS.get(normalize_status(status), 1)
