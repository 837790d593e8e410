from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AchievementType


@dataclass(frozen=True)
class WriterAchievement:
    achievement_id: int
    writer_id: int
    achievement_type: AchievementType
    description: str
    awarded_at: Optional[datetime] = None
