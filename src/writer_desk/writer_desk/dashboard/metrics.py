"""Performance figures derived straight from a writer's assignment rows.

These never read the cached counters on the writer; they are the reference the
cache is checked against.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from ..assignments.model import Assignment
from ..assignments.status import is_active, is_completed
from ..common.numbers import number_or_zero, round_half_up
from ..stats.on_time import is_on_time
from .model import AssignmentCounts, WriterPerformance


def average_rating(rating: Any) -> float:
    """Quality score of a composite rating, a bare number as-is, else 0."""

    if not rating:
        return 0.0
    if isinstance(rating, Mapping):
        return number_or_zero(rating.get("quality"))
    if isinstance(rating, (list, tuple, set)):
        return 0.0
    return number_or_zero(rating)


def percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def summarize(assignments: Sequence[Assignment], *, rating: Any) -> tuple[WriterPerformance, AssignmentCounts]:
    completed = [a for a in assignments if is_completed(a.status)]
    on_time = sum(1 for a in completed if is_on_time(a))

    total_earnings = sum(number_or_zero(a.writer_price) for a in completed)
    # Part-payments on jobs still in progress count as paid.
    total_paid = sum(number_or_zero(a.writer_paid_amount) for a in assignments)
    avg = average_rating(rating)

    performance = WriterPerformance(
        completion_rate=percentage(len(completed), len(assignments)),
        average_rating=avg,
        on_time_rate=percentage(on_time, len(completed)),
        total_earnings=total_earnings,
        total_paid=total_paid,
        pending_payment=total_earnings - total_paid,
    )
    counts = AssignmentCounts(
        total=len(assignments),
        active=sum(1 for a in assignments if is_active(a.status)),
        completed=len(completed),
    )
    return performance, counts
