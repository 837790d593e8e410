from __future__ import annotations

import logging
from typing import Optional

from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..assignments.status import COMPLETED, is_completed
from ..writers.repository import WriterRepository
from .model import WriterStats
from .on_time import is_on_time

logger = logging.getLogger(__name__)


class WriterStatsReconciler:
    """Keeps a writer's cached counters equal to what its assignments say.

    The counters are a materialized view of the assignment table: every call
    recomputes them from scratch, so repeated calls are harmless.
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        writers: WriterRepository,
        *,
        reconcile_previous_writer: bool = False,
    ):
        self._assignments = assignments
        self._writers = writers
        self._reconcile_previous_writer = bool(reconcile_previous_writer)

    def compute(self, writer_id: int) -> WriterStats:
        total = self._assignments.count_for_writer(writer_id)
        completed = [
            a
            for a in self._assignments.list_for_writer(writer_id, statuses=[COMPLETED])
            if is_completed(a.status)
        ]
        on_time = sum(1 for a in completed if is_on_time(a))
        return WriterStats(
            total_assignments=total,
            completed_assignments=len(completed),
            on_time_deliveries=on_time,
        )

    def recompute(self, writer_id: Optional[int]) -> None:
        """Recompute and store the counters; failures are logged, never raised."""

        if writer_id is None:
            return

        try:
            stats = self.compute(writer_id)
            self._writers.update_stats(writer_id, stats)
        except Exception:
            logger.exception("Error syncing writer stats (writer_id=%s)", writer_id)

    def on_assignment_changed(self, before: Optional[Assignment], after: Optional[Assignment]) -> None:
        """Called by the mutation boundary after an assignment write is durable.

        ``before`` is None for a create, ``after`` is None for a delete.
        """

        current = after.writer_id if after is not None else (before.writer_id if before is not None else None)
        self.recompute(current)

        # Reassignment leaves the old writer's counters too high unless enabled.
        if not self._reconcile_previous_writer or before is None or after is None:
            return
        if before.writer_id is not None and before.writer_id != after.writer_id:
            self.recompute(before.writer_id)
