from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_record_id
from ..common.payload import filter_payload
from ..core.enums import AssignmentPriority, AssignmentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..stats.reconciler import WriterStatsReconciler
from ..students.repository import StudentRepository
from ..writers.repository import WriterRepository
from .lifecycle import apply_status_transition
from .model import Assignment
from .repository import AssignmentRepository
from .schema import ASSIGNMENT_FIELDS, REQUIRED_ON_CREATE, wire_name


class AssignmentService:
    """Mutation boundary for assignments.

    Every write runs in the same order: status transition, durable write, then
    the stats notification for the writer(s) involved.
    """

    def __init__(
        self,
        assignments: AssignmentRepository,
        students: StudentRepository,
        writers: WriterRepository,
        reconciler: WriterStatsReconciler,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._assignments = assignments
        self._students = students
        self._writers = writers
        self._reconciler = reconciler
        self._id_factory = id_factory

    def list_assignments(self) -> Sequence[Assignment]:
        return self._assignments.list_all()

    def get_assignment(self, assignment_id: str) -> Assignment:
        assignment = self._assignments.get_by_id(assignment_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        return assignment

    def new_id(self) -> str:
        candidate = self._id_factory()
        while self._assignments.get_by_id(candidate) is not None:
            candidate = self._id_factory()
        return candidate

    def create(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> Assignment:
        now = now or now_local()
        fields = filter_payload(payload, ASSIGNMENT_FIELDS)
        fields.setdefault("status", None)
        fields.setdefault("priority", None)
        _default_blank_choices(fields)

        for name in REQUIRED_ON_CREATE:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{wire_name(name)} is required")
        self._check_references(fields)

        draft = Assignment(assignment_id=self.new_id(), created_at=now, updated_at=now, **fields)
        created = apply_status_transition(None, draft, now=now)

        self._assignments.create(created)
        self._reconciler.on_assignment_changed(None, created)
        return created

    def update(self, assignment_id: str, payload: Mapping[str, Any], *, now: datetime | None = None) -> Assignment:
        now = now or now_local()
        before = self.get_assignment(assignment_id)

        fields = filter_payload(payload, ASSIGNMENT_FIELDS)
        _default_blank_choices(fields)
        for name in REQUIRED_ON_CREATE:
            if name in fields and fields[name] in (None, ""):
                raise ValidationError(f"{wire_name(name)} cannot be empty")
        self._check_references(fields)

        after = apply_status_transition(before, replace(before, updated_at=now, **fields), now=now)

        if not self._assignments.update(after):
            raise NotFoundError("Assignment not found")
        self._reconciler.on_assignment_changed(before, after)
        return after

    def delete(self, assignment_id: str) -> None:
        before = self.get_assignment(assignment_id)
        if not self._assignments.delete_by_id(assignment_id):
            raise NotFoundError("Assignment not found")
        self._reconciler.on_assignment_changed(before, None)

    def _check_references(self, fields: Mapping[str, Any]) -> None:
        student_id = fields.get("student_id")
        if student_id is not None and not self._students.get_by_id(student_id):
            raise ValidationError("Student not found")

        writer_id = fields.get("writer_id")
        if writer_id is not None and not self._writers.get_by_id(writer_id):
            raise ValidationError("Writer not found")


_CHOICE_DEFAULTS = {
    "status": AssignmentStatus.PENDING.value,
    "priority": AssignmentPriority.MEDIUM.value,
}


def _default_blank_choices(fields: dict) -> None:
    for name, default in _CHOICE_DEFAULTS.items():
        if name in fields and not str(fields[name] or "").strip():
            fields[name] = default
