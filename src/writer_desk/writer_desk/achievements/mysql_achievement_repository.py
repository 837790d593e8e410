from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import AchievementType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import WriterAchievement
from .repository import AchievementRepository


class MySQLAchievementRepository(AchievementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent_for_writer(self, writer_id: int, limit: int) -> Sequence[WriterAchievement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, writer_id, achievement_type, description, awarded_at
                FROM writer_achievements
                WHERE writer_id=%s
                ORDER BY awarded_at DESC, id DESC
                LIMIT %s
                """,
                (int(writer_id), int(limit)),
            )
            return [
                WriterAchievement(
                    achievement_id=int(r["id"]),
                    writer_id=int(r["writer_id"]),
                    achievement_type=AchievementType(r["achievement_type"]),
                    description=r["description"],
                    awarded_at=r.get("awarded_at"),
                )
                for r in fetchall(cur)
            ]

    def create(
        self,
        *,
        writer_id: int,
        achievement_type: AchievementType,
        description: str,
        awarded_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO writer_achievements(writer_id, achievement_type, description, awarded_at)
                VALUES(%s,%s,%s,%s)
                """,
                (int(writer_id), achievement_type.value, description, awarded_at),
            )
            return int(cur.lastrowid)

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM writer_achievements")
            return cur.rowcount
