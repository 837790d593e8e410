from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, student: Student) -> str:
        raise NotImplementedError

    def update(self, student_id: str, fields: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        """Delete the student; its assignments go with it (ON DELETE CASCADE)."""

        raise NotImplementedError

    def upsert_many(self, students: Sequence[Student]) -> int:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
