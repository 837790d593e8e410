from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    """Record store for assignments.

    Status filters compare case-insensitively against the lowercase values given.
    """

    def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Assignment]:
        raise NotImplementedError

    def count_for_writer(self, writer_id: int) -> int:
        raise NotImplementedError

    def list_for_writer(self, writer_id: int, *, statuses: Optional[Sequence[str]] = None) -> Sequence[Assignment]:
        """Assignments referencing the writer, newest first."""

        raise NotImplementedError

    def list_unassigned(self, *, statuses: Sequence[str], limit: int) -> Sequence[Assignment]:
        """Assignments without a writer, newest first."""

        raise NotImplementedError

    def list_writer_ids_for_student(self, student_id: str) -> Sequence[int]:
        raise NotImplementedError

    def create(self, assignment: Assignment) -> str:
        raise NotImplementedError

    def update(self, assignment: Assignment) -> bool:
        """Persist every mutable field of ``assignment`` (matched by id)."""

        raise NotImplementedError

    def delete_by_id(self, assignment_id: str) -> bool:
        raise NotImplementedError

    def list_rows_with_missing_id(self) -> Sequence[Assignment]:
        """Rows whose id is NULL or the literal string 'null' (``row_no`` is set)."""

        raise NotImplementedError

    def set_id_for_row(self, row_no: int, assignment_id: str) -> bool:
        raise NotImplementedError

    def earnings_by_writer(self, *, statuses: Sequence[str], limit: int) -> Sequence[tuple[int, float]]:
        """(writer_id, sum of writer_price) for assigned rows, highest first."""

        raise NotImplementedError

    def upsert_many(self, assignments: Sequence[Assignment]) -> int:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
