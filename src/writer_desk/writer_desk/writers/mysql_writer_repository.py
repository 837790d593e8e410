from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_RATING
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json, encode_json, fetchall, fetchone, placeholders
from .model import Writer
from .repository import WriterRepository

if TYPE_CHECKING:
    from ..stats.model import WriterStats

_COLUMNS = (
    "id, phone, name, email, specialty, is_flagged, rating, availability_status, max_concurrent_tasks, "
    "total_assignments, completed_assignments, on_time_deliveries, level, points, streak, "
    "last_active, created_at, updated_at"
)

_UPDATABLE = (
    "phone",
    "name",
    "email",
    "specialty",
    "is_flagged",
    "rating",
    "availability_status",
    "max_concurrent_tasks",
)

_IMPORT_COLUMNS = (
    "id",
    "phone",
    "name",
    "email",
    "specialty",
    "is_flagged",
    "rating",
    "availability_status",
    "max_concurrent_tasks",
    "total_assignments",
    "completed_assignments",
    "on_time_deliveries",
    "level",
    "points",
    "streak",
    "last_active",
)


def _row_to_writer(r: dict) -> Writer:
    return Writer(
        writer_id=int(r["id"]),
        name=r["name"],
        phone=r.get("phone"),
        email=r.get("email"),
        specialty=r.get("specialty"),
        is_flagged=bool(r.get("is_flagged")),
        rating=decode_json(r.get("rating"), dict(DEFAULT_RATING)),
        availability_status=r.get("availability_status") or "available",
        max_concurrent_tasks=int(r.get("max_concurrent_tasks") or 0),
        total_assignments=int(r.get("total_assignments") or 0),
        completed_assignments=int(r.get("completed_assignments") or 0),
        on_time_deliveries=int(r.get("on_time_deliveries") or 0),
        level=r.get("level") or "Bronze",
        points=int(r.get("points") or 0),
        streak=int(r.get("streak") or 0),
        last_active=r.get("last_active"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _column_value(column: str, value: Any) -> Any:
    if column == "rating":
        return encode_json(value)
    if column == "is_flagged":
        return int(bool(value))
    return value


class MySQLWriterRepository(WriterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, writer_id: int) -> Optional[Writer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM writers WHERE id=%s", (int(writer_id),))
            r = fetchone(cur)
            return _row_to_writer(r) if r else None

    def get_by_phone(self, phone: str) -> Optional[Writer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM writers WHERE phone=%s", (phone,))
            r = fetchone(cur)
            return _row_to_writer(r) if r else None

    def get_many(self, writer_ids: Sequence[int]) -> Mapping[int, Writer]:
        ids = sorted({int(i) for i in writer_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM writers WHERE id IN ({placeholders(ids)})", tuple(ids))
            return {int(r["id"]): _row_to_writer(r) for r in fetchall(cur)}

    def list_all(self) -> Sequence[Writer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM writers ORDER BY id ASC")
            return [_row_to_writer(r) for r in fetchall(cur)]

    def max_phone_with_prefix(self, prefix: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT phone FROM writers WHERE phone LIKE %s ORDER BY phone DESC LIMIT 1",
                (f"{prefix}%",),
            )
            r = fetchone(cur)
            return r["phone"] if r else None

    def create(self, writer: Writer) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO writers(
                    phone, name, email, specialty, is_flagged, rating,
                    availability_status, max_concurrent_tasks, level, points, streak, last_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    writer.phone,
                    writer.name,
                    writer.email,
                    writer.specialty,
                    int(writer.is_flagged),
                    encode_json(writer.rating),
                    writer.availability_status,
                    int(writer.max_concurrent_tasks),
                    writer.level,
                    int(writer.points),
                    int(writer.streak),
                    writer.last_active,
                ),
            )
            return int(cur.lastrowid)

    def update(self, writer_id: int, fields: Mapping[str, Any]) -> bool:
        columns = [c for c in _UPDATABLE if c in fields]
        if not columns:
            return self.get_by_id(writer_id) is not None

        sets = ", ".join(f"{c}=%s" for c in columns)
        params = [_column_value(c, fields[c]) for c in columns]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE writers SET {sets} WHERE id=%s", (*params, int(writer_id)))
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM writers WHERE id=%s", (int(writer_id),))
            return fetchone(cur) is not None

    def update_stats(self, writer_id: int, stats: "WriterStats") -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE writers
                SET total_assignments=%s, completed_assignments=%s, on_time_deliveries=%s
                WHERE id=%s
                """,
                (
                    int(stats.total_assignments),
                    int(stats.completed_assignments),
                    int(stats.on_time_deliveries),
                    int(writer_id),
                ),
            )
            return cur.rowcount > 0

    def touch_last_active(self, writer_id: int, when: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE writers SET last_active=%s WHERE id=%s", (when, int(writer_id)))
            return cur.rowcount > 0

    def delete_by_id(self, writer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM writers WHERE id=%s", (int(writer_id),))
            return cur.rowcount > 0

    def upsert_many(self, writers: Sequence[Writer]) -> int:
        if not writers:
            return 0
        updates = ", ".join(f"{c}=VALUES({c})" for c in _IMPORT_COLUMNS if c != "id")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"""
                INSERT INTO writers({', '.join(_IMPORT_COLUMNS)}) VALUES({placeholders(_IMPORT_COLUMNS)})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                [
                    (
                        int(w.writer_id),
                        w.phone,
                        w.name,
                        w.email,
                        w.specialty,
                        int(w.is_flagged),
                        encode_json(w.rating),
                        w.availability_status,
                        int(w.max_concurrent_tasks),
                        int(w.total_assignments),
                        int(w.completed_assignments),
                        int(w.on_time_deliveries),
                        w.level,
                        int(w.points),
                        int(w.streak),
                        w.last_active,
                    )
                    for w in writers
                ],
            )
            return len(writers)

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM writers")
            return cur.rowcount
