from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import now_local
from ..common.ids import new_record_id
from ..common.payload import filter_payload
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..stats.reconciler import WriterStatsReconciler
from .model import Student
from .repository import StudentRepository
from .schema import STUDENT_FIELDS

_REQUIRED = ("name", "email", "phone")


class StudentService:
    """Use case: manage students (admin)."""

    def __init__(
        self,
        students: StudentRepository,
        assignments: AssignmentRepository,
        reconciler: WriterStatsReconciler,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._students = students
        self._assignments = assignments
        self._reconciler = reconciler
        self._id_factory = id_factory

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create_student(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> Student:
        now = now or now_local()
        fields = filter_payload(payload, STUDENT_FIELDS)
        for name in _REQUIRED:
            fields[name] = require_non_empty(fields.get(name), name)

        student_id = self._id_factory()
        while self._students.get_by_id(student_id) is not None:
            student_id = self._id_factory()

        self._check_referrer(fields.get("referred_by"), student_id=student_id)
        student = Student(student_id=student_id, created_at=now, updated_at=now, **fields)
        self._students.create(student)
        return student

    def update_student(self, student_id: str, payload: Mapping[str, Any]) -> Student:
        self.get_student(student_id)

        fields = filter_payload(payload, STUDENT_FIELDS)
        for name in _REQUIRED:
            if name in fields:
                fields[name] = require_non_empty(fields[name], name)
        if "referred_by" in fields:
            self._check_referrer(fields["referred_by"], student_id=student_id)

        if not self._students.update(student_id, fields):
            raise NotFoundError("Student not found")
        return self.get_student(student_id)

    def delete_student(self, student_id: str) -> None:
        """Delete a student and, by cascade, its assignments.

        The cascade happens inside the database, so the writers who lose work are
        collected beforehand and reconciled once the delete is durable.
        """

        self.get_student(student_id)
        writer_ids = list(self._assignments.list_writer_ids_for_student(student_id))

        if not self._students.delete_by_id(student_id):
            raise NotFoundError("Student not found")

        for writer_id in writer_ids:
            self._reconciler.recompute(writer_id)

    def _check_referrer(self, referred_by: str | None, *, student_id: str) -> None:
        if referred_by is None:
            return
        if referred_by == student_id:
            raise ValidationError("A student cannot refer themselves")
        if not self._students.get_by_id(referred_by):
            raise ValidationError("Referring student not found")
