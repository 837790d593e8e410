from __future__ import annotations

from typing import Optional, Sequence

from ..achievements.repository import AchievementRepository
from ..assignments.repository import AssignmentRepository
from ..assignments.status import COMPLETED, PENDING
from ..common.numbers import round_half_up
from ..core.constants import DASHBOARD_ACHIEVEMENT_LIMIT, DASHBOARD_AVAILABLE_LIMIT, LEADERBOARD_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..writers.repository import WriterRepository
from .metrics import summarize
from .model import LeaderboardEntry, WriterDashboard


class WriterDashboardService:
    """Read-only views for the writer-facing dashboard."""

    def __init__(
        self,
        writers: WriterRepository,
        assignments: AssignmentRepository,
        achievements: AchievementRepository,
    ):
        self._writers = writers
        self._assignments = assignments
        self._achievements = achievements

    @staticmethod
    def authorize_view(*, current_role: Role, current_writer_id: Optional[int], writer_id: int) -> None:
        """Writers may only open their own dashboard; admins may open any."""

        if current_role == Role.ADMIN:
            return
        if current_role == Role.WRITER and current_writer_id is not None and int(current_writer_id) == int(writer_id):
            return
        raise AuthorizationError("Access denied: You can only view your own dashboard")

    def build_writer_dashboard(self, writer_id: int) -> WriterDashboard:
        writer = self._writers.get_by_id(writer_id)
        if not writer:
            raise NotFoundError("Writer not found")

        assignments = list(self._assignments.list_for_writer(writer_id))
        performance, counts = summarize(assignments, rating=writer.rating)

        achievements = self._achievements.list_recent_for_writer(writer_id, DASHBOARD_ACHIEVEMENT_LIMIT)
        available = self._assignments.list_unassigned(statuses=[PENDING], limit=DASHBOARD_AVAILABLE_LIMIT)

        return WriterDashboard(
            writer=writer,
            # Points are not awarded yet; earnings stand in until they are.
            points=writer.points or performance.total_earnings,
            performance=performance,
            counts=counts,
            assignments=assignments,
            achievements=list(achievements),
            available_assignments=list(available),
        )

    def leaderboard(self, *, limit: int = LEADERBOARD_LIMIT) -> Sequence[LeaderboardEntry]:
        totals = self._assignments.earnings_by_writer(statuses=[COMPLETED], limit=limit)
        writers = self._writers.get_many([writer_id for writer_id, _ in totals])

        entries = []
        for writer_id, total in totals:
            writer = writers.get(writer_id)
            entries.append(
                LeaderboardEntry(
                    name=writer.name if writer else "Unknown Writer",
                    total_earnings=round_half_up(total),
                )
            )
        return entries
