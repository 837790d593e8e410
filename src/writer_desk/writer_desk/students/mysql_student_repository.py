from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = (
    "id, name, email, phone, university, remarks, is_flagged, referred_by, created_at, updated_at"
)

_UPDATABLE = ("name", "email", "phone", "university", "remarks", "is_flagged", "referred_by")


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=r["id"],
        name=r["name"],
        email=r["email"],
        phone=r["phone"],
        university=r.get("university"),
        remarks=r.get("remarks"),
        is_flagged=bool(r.get("is_flagged")),
        referred_by=r.get("referred_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC")
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(self, student: Student) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(id, name, email, phone, university, remarks, is_flagged, referred_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student.student_id,
                    student.name,
                    student.email,
                    student.phone,
                    student.university,
                    student.remarks,
                    int(student.is_flagged),
                    student.referred_by,
                ),
            )
            return student.student_id

    def update(self, student_id: str, fields: Mapping[str, Any]) -> bool:
        columns = [c for c in _UPDATABLE if c in fields]
        if not columns:
            return self.get_by_id(student_id) is not None

        assignments = ", ".join(f"{c}=%s" for c in columns)
        params = [int(fields[c]) if c == "is_flagged" else fields[c] for c in columns]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {assignments} WHERE id=%s", (*params, student_id))
            # rowcount is 0 when values are unchanged, so re-check existence.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM students WHERE id=%s", (student_id,))
            return fetchone(cur) is not None

    def delete_by_id(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
            return cur.rowcount > 0

    def upsert_many(self, students: Sequence[Student]) -> int:
        if not students:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO students(id, name, email, phone, university, remarks, is_flagged, referred_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), email=VALUES(email), phone=VALUES(phone),
                    university=VALUES(university), remarks=VALUES(remarks),
                    is_flagged=VALUES(is_flagged), referred_by=VALUES(referred_by)
                """,
                [
                    (
                        s.student_id,
                        s.name,
                        s.email,
                        s.phone,
                        s.university,
                        s.remarks,
                        int(s.is_flagged),
                        s.referred_by,
                    )
                    for s in students
                ],
            )
            return len(students)

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students")
            return cur.rowcount
