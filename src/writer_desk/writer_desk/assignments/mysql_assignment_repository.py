from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json, encode_json, fetchall, fetchone, placeholders
from .model import Assignment
from .repository import AssignmentRepository

# Order matters: shared by SELECT, INSERT and UPDATE statements.
_DATA_COLUMNS = (
    "student_id",
    "writer_id",
    "title",
    "type",
    "subject",
    "level",
    "deadline",
    "completed_at",
    "status",
    "priority",
    "document_link",
    "word_count",
    "cost_per_word",
    "writer_cost_per_word",
    "price",
    "paid_amount",
    "writer_price",
    "writer_paid_amount",
    "sunk_costs",
    "is_dissertation",
    "total_chapters",
    "chapters",
    "description",
    "activity_log",
    "payment_history",
    "status_history",
    "attachments",
    "is_archived",
)

_SELECT = "SELECT row_no, id, " + ", ".join(_DATA_COLUMNS) + ", created_at, updated_at FROM assignments"

_MISSING_ID = "(id IS NULL OR id = 'null')"


def _row_to_assignment(r: dict) -> Assignment:
    raw_id = r.get("id")
    return Assignment(
        assignment_id=None if raw_id in (None, "null") else raw_id,
        student_id=r["student_id"],
        writer_id=int(r["writer_id"]) if r.get("writer_id") is not None else None,
        title=r["title"],
        type=r["type"],
        subject=r["subject"],
        level=r["level"],
        deadline=r.get("deadline"),
        completed_at=r.get("completed_at"),
        status=r.get("status") or "",
        priority=r.get("priority") or "",
        document_link=r.get("document_link"),
        word_count=int(r.get("word_count") or 0),
        cost_per_word=float(r.get("cost_per_word") or 0),
        writer_cost_per_word=float(r.get("writer_cost_per_word") or 0),
        price=float(r.get("price") or 0),
        paid_amount=float(r.get("paid_amount") or 0),
        writer_price=float(r.get("writer_price") or 0),
        writer_paid_amount=float(r.get("writer_paid_amount") or 0),
        sunk_costs=float(r.get("sunk_costs") or 0),
        is_dissertation=bool(r.get("is_dissertation")),
        total_chapters=r.get("total_chapters"),
        chapters=decode_json(r.get("chapters")),
        description=r.get("description"),
        activity_log=decode_json(r.get("activity_log"), []),
        payment_history=decode_json(r.get("payment_history"), []),
        status_history=decode_json(r.get("status_history"), []),
        attachments=decode_json(r.get("attachments"), []),
        is_archived=bool(r.get("is_archived")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        row_no=int(r["row_no"]) if r.get("row_no") is not None else None,
    )


def _data_params(a: Assignment) -> tuple:
    return (
        a.student_id,
        a.writer_id,
        a.title,
        a.type,
        a.subject,
        a.level,
        a.deadline,
        a.completed_at,
        a.status,
        a.priority,
        a.document_link,
        int(a.word_count),
        float(a.cost_per_word),
        float(a.writer_cost_per_word),
        float(a.price),
        float(a.paid_amount),
        float(a.writer_price),
        float(a.writer_paid_amount),
        float(a.sunk_costs),
        int(a.is_dissertation),
        a.total_chapters,
        encode_json(a.chapters),
        a.description,
        encode_json(a.activity_log),
        encode_json(a.payment_history),
        encode_json(a.status_history),
        encode_json(a.attachments),
        int(a.is_archived),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE id=%s", (assignment_id,))
            r = fetchone(cur)
            return _row_to_assignment(r) if r else None

    def list_all(self) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY created_at DESC, row_no DESC")
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def count_for_writer(self, writer_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM assignments WHERE writer_id=%s", (int(writer_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_for_writer(self, writer_id: int, *, statuses: Optional[Sequence[str]] = None) -> Sequence[Assignment]:
        clauses = ["writer_id=%s"]
        params: list[object] = [int(writer_id)]
        if statuses is not None:
            if not statuses:
                return []
            clauses.append(f"LOWER(TRIM(status)) IN ({placeholders(statuses)})")
            params.extend(s.lower() for s in statuses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, row_no DESC",
                tuple(params),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def list_unassigned(self, *, statuses: Sequence[str], limit: int) -> Sequence[Assignment]:
        if not statuses:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE writer_id IS NULL AND LOWER(TRIM(status)) IN ({placeholders(statuses)})
                ORDER BY created_at DESC, row_no DESC
                LIMIT %s
                """,
                (*[s.lower() for s in statuses], int(limit)),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def list_writer_ids_for_student(self, student_id: str) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT writer_id FROM assignments WHERE student_id=%s AND writer_id IS NOT NULL",
                (student_id,),
            )
            return [int(r["writer_id"]) for r in fetchall(cur)]

    def create(self, assignment: Assignment) -> str:
        columns = ("id", *_DATA_COLUMNS, "created_at", "updated_at")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO assignments({', '.join(columns)}) VALUES({placeholders(columns)})",
                (
                    assignment.assignment_id,
                    *_data_params(assignment),
                    assignment.created_at,
                    assignment.updated_at,
                ),
            )
            return str(assignment.assignment_id)

    def update(self, assignment: Assignment) -> bool:
        sets = ", ".join(f"{c}=%s" for c in (*_DATA_COLUMNS, "updated_at"))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE assignments SET {sets} WHERE id=%s",
                (*_data_params(assignment), assignment.updated_at, assignment.assignment_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, assignment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM assignments WHERE id=%s", (assignment_id,))
            return cur.rowcount > 0

    def list_rows_with_missing_id(self) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {_MISSING_ID} ORDER BY row_no ASC")
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def set_id_for_row(self, row_no: int, assignment_id: str) -> bool:
        # Guarded by the missing-id predicate so a re-run never overwrites a repaired row.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE assignments SET id=%s WHERE row_no=%s AND {_MISSING_ID}",
                (assignment_id, int(row_no)),
            )
            return cur.rowcount > 0

    def earnings_by_writer(self, *, statuses: Sequence[str], limit: int) -> Sequence[tuple[int, float]]:
        if not statuses:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT writer_id, SUM(writer_price) AS total_earnings
                FROM assignments
                WHERE writer_id IS NOT NULL AND LOWER(TRIM(status)) IN ({placeholders(statuses)})
                GROUP BY writer_id
                ORDER BY total_earnings DESC
                LIMIT %s
                """,
                (*[s.lower() for s in statuses], int(limit)),
            )
            return [(int(r["writer_id"]), float(r.get("total_earnings") or 0)) for r in fetchall(cur)]

    def upsert_many(self, assignments: Sequence[Assignment]) -> int:
        if not assignments:
            return 0
        columns = ("id", *_DATA_COLUMNS, "created_at", "updated_at")
        updates = ", ".join(f"{c}=VALUES({c})" for c in (*_DATA_COLUMNS, "updated_at"))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"""
                INSERT INTO assignments({', '.join(columns)}) VALUES({placeholders(columns)})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                [(a.assignment_id, *_data_params(a), a.created_at, a.updated_at) for a in assignments],
            )
            return len(assignments)

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM assignments")
            return cur.rowcount
