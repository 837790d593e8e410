from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import AchievementType
from ..core.exceptions import NotFoundError, ValidationError
from ..writers.repository import WriterRepository
from .model import WriterAchievement
from .repository import AchievementRepository


class AchievementService:
    """Use case: award achievements to writers (admin)."""

    def __init__(self, achievements: AchievementRepository, writers: WriterRepository):
        self._achievements = achievements
        self._writers = writers

    def award(self, writer_id: int, payload: Mapping[str, Any]) -> WriterAchievement:
        if not self._writers.get_by_id(writer_id):
            raise NotFoundError("Writer not found")
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")

        try:
            achievement_type = AchievementType(payload.get("achievementType"))
        except ValueError:
            allowed = ", ".join(t.value for t in AchievementType)
            raise ValidationError(f"achievementType must be one of: {allowed}")

        description = require_non_empty(payload.get("description"), "description")
        awarded_at = now_local()
        achievement_id = self._achievements.create(
            writer_id=writer_id,
            achievement_type=achievement_type,
            description=description,
            awarded_at=awarded_at,
        )
        return WriterAchievement(
            achievement_id=achievement_id,
            writer_id=writer_id,
            achievement_type=achievement_type,
            description=description,
            awarded_at=awarded_at,
        )
