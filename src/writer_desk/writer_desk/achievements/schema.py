from __future__ import annotations

from typing import Any

from ..common.datetime_utils import format_datetime
from .model import WriterAchievement


def achievement_to_json(a: WriterAchievement) -> dict[str, Any]:
    return {
        "id": a.achievement_id,
        "writerId": a.writer_id,
        "achievementType": a.achievement_type.value,
        "description": a.description,
        "awardedAt": format_datetime(a.awarded_at),
    }
