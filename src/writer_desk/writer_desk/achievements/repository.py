from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import AchievementType
from .model import WriterAchievement


class AchievementRepository(Protocol):
    def list_recent_for_writer(self, writer_id: int, limit: int) -> Sequence[WriterAchievement]:
        raise NotImplementedError

    def create(
        self,
        *,
        writer_id: int,
        achievement_type: AchievementType,
        description: str,
        awarded_at: datetime,
    ) -> int:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
