from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Sequence

from ..achievements.repository import AchievementRepository
from ..assignments.lifecycle import apply_status_transition
from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..assignments.schema import ASSIGNMENT_IMPORT_FIELDS, REQUIRED_ON_CREATE, assignment_to_json, wire_name
from ..common.datetime_utils import now_local
from ..common.ids import new_record_id
from ..common.payload import filter_payload
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..stats.reconciler import WriterStatsReconciler
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.schema import STUDENT_IMPORT_FIELDS, student_to_json
from ..writers.model import Writer
from ..writers.repository import WriterRepository
from ..writers.schema import WRITER_IMPORT_FIELDS, writer_to_json
from ..writers.service import WriterService

logger = logging.getLogger(__name__)

_COLLECTIONS = ("students", "writers", "assignments")


@dataclass(frozen=True)
class ImportCounts:
    students: int
    writers: int
    assignments: int


class DataTransferService:
    """Whole-database backup, restore and wipe for the admin settings page."""

    def __init__(
        self,
        students: StudentRepository,
        writers: WriterRepository,
        assignments: AssignmentRepository,
        achievements: AchievementRepository,
        reconciler: WriterStatsReconciler,
        writer_service: WriterService,
    ):
        self._students = students
        self._writers = writers
        self._assignments = assignments
        self._achievements = achievements
        self._reconciler = reconciler
        self._writer_service = writer_service

    def export_all(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "students": [student_to_json(s) for s in self._students.list_all()],
            "writers": [writer_to_json(w) for w in self._writers.list_all()],
            "assignments": [assignment_to_json(a) for a in self._assignments.list_all()],
        }

    def bulk_import(self, payload: Any, *, now: datetime | None = None) -> ImportCounts:
        """Upsert students, then writers, then assignments (foreign-key order).

        Rows are matched on id; existing rows are overwritten. Writers referenced
        by the imported assignments are reconciled afterwards, since imported
        counters cannot be trusted. The whole payload is validated first, so a
        bad row raises ValidationError before anything is written.
        """

        now = now or now_local()
        if not isinstance(payload, Mapping) or any(not isinstance(payload.get(k), list) for k in _COLLECTIONS):
            raise ValidationError("Invalid data format")

        students = [self._student_from_json(item) for item in payload["students"]]
        writers = self._writers_from_json(payload["writers"])
        assignments = [self._assignment_from_json(item, now=now) for item in payload["assignments"]]
        self._check_references(assignments, students=students, writers=writers)

        counts = ImportCounts(
            students=self._students.upsert_many(students),
            writers=self._writers.upsert_many(writers),
            assignments=self._assignments.upsert_many(assignments),
        )
        logger.info(
            "Imported %d students, %d writers, %d assignments",
            counts.students,
            counts.writers,
            counts.assignments,
        )

        for writer_id in sorted({a.writer_id for a in assignments if a.writer_id is not None}):
            self._reconciler.recompute(writer_id)
        return counts

    def clear_all(self) -> None:
        # Children first; the foreign keys would cascade anyway.
        self._assignments.delete_all()
        self._achievements.delete_all()
        self._writers.delete_all()
        self._students.delete_all()
        logger.warning("All data cleared")

    @staticmethod
    def _student_from_json(item: Any) -> Student:
        fields = filter_payload(item, STUDENT_IMPORT_FIELDS)
        fields["student_id"] = require_non_empty(fields.get("student_id"), "id")
        for name in ("name", "email", "phone"):
            fields[name] = require_non_empty(fields.get(name), name)
        return Student(**fields)

    def _writers_from_json(self, items: Sequence[Any]) -> list[Writer]:
        writers = []
        for item in items:
            fields = filter_payload(item, WRITER_IMPORT_FIELDS)
            if fields.get("writer_id") is None:
                raise ValidationError("Writer id is required")
            fields["name"] = require_non_empty(fields.get("name"), "name")
            fields.setdefault("phone", None)
            if fields.get("rating") is None:
                fields.pop("rating", None)
            writers.append(Writer(**fields))

        imported_ids = {w.writer_id for w in writers}
        taken = {w.phone for w in self._writers.list_all() if w.writer_id not in imported_ids and w.phone}
        return [self._writer_service.normalize_for_import(w, taken=taken) for w in writers]

    def _assignment_from_json(self, item: Any, *, now: datetime) -> Assignment:
        fields = filter_payload(item, ASSIGNMENT_IMPORT_FIELDS)
        for name in REQUIRED_ON_CREATE:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{wire_name(name)} is required")
        for name in ("status", "priority"):
            if not fields.get(name):
                fields.pop(name, None)

        if not fields.get("assignment_id"):
            fields["assignment_id"] = new_record_id()
        fields["created_at"] = fields.get("created_at") or now
        fields["updated_at"] = fields.get("updated_at") or now

        assignment = Assignment(**fields)
        return apply_status_transition(None, assignment, now=assignment.updated_at)

    def _check_references(
        self,
        assignments: Sequence[Assignment],
        *,
        students: Sequence[Student],
        writers: Sequence[Writer],
    ) -> None:
        student_ids = {s.student_id for s in students}
        writer_ids = {w.writer_id for w in writers}

        for a in assignments:
            if a.student_id not in student_ids:
                if not self._students.get_by_id(a.student_id):
                    raise ValidationError(f"Student not found: {a.student_id}")
                student_ids.add(a.student_id)
            if a.writer_id is not None and a.writer_id not in writer_ids:
                if not self._writers.get_by_id(a.writer_id):
                    raise ValidationError(f"Writer not found: {a.writer_id}")
                writer_ids.add(a.writer_id)
