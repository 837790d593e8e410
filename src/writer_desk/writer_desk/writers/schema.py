from __future__ import annotations

from typing import Any

from ..common.datetime_utils import format_datetime, parse_datetime
from ..common.payload import FieldSpec, as_bool, as_optional_str
from ..common.validators import as_int, as_optional_int
from ..core.exceptions import ValidationError
from .model import Writer


def _as_max_tasks(value: Any) -> int:
    return as_int(value, "maxConcurrentTasks")


def _as_last_active(value: Any):
    try:
        return parse_datetime(value)
    except ValueError:
        raise ValidationError("lastActive must be an ISO-8601 date")


WRITER_FIELDS: FieldSpec = {
    "phone": ("phone", as_optional_str),
    "name": ("name", None),
    "email": ("email", as_optional_str),
    "specialty": ("specialty", as_optional_str),
    "isFlagged": ("is_flagged", as_bool),
    "rating": ("rating", None),
    "availabilityStatus": ("availability_status", None),
    "maxConcurrentTasks": ("max_concurrent_tasks", _as_max_tasks),
}

# Import/restore also carries the derived and gamification fields.
WRITER_IMPORT_FIELDS: FieldSpec = {
    "id": ("writer_id", lambda v: as_optional_int(v, "id")),
    **WRITER_FIELDS,
    "totalAssignments": ("total_assignments", lambda v: as_int(v, "totalAssignments")),
    "completedAssignments": ("completed_assignments", lambda v: as_int(v, "completedAssignments")),
    "onTimeDeliveries": ("on_time_deliveries", lambda v: as_int(v, "onTimeDeliveries")),
    "level": ("level", None),
    "points": ("points", lambda v: as_int(v, "points")),
    "streak": ("streak", lambda v: as_int(v, "streak")),
    "lastActive": ("last_active", _as_last_active),
}


def writer_to_json(w: Writer) -> dict[str, Any]:
    return {
        "id": w.writer_id,
        "phone": w.phone,
        "name": w.name,
        "email": w.email,
        "specialty": w.specialty,
        "isFlagged": w.is_flagged,
        "rating": w.rating,
        "availabilityStatus": w.availability_status,
        "maxConcurrentTasks": w.max_concurrent_tasks,
        "totalAssignments": w.total_assignments,
        "completedAssignments": w.completed_assignments,
        "onTimeDeliveries": w.on_time_deliveries,
        "level": w.level,
        "points": w.points,
        "streak": w.streak,
        "lastActive": format_datetime(w.last_active),
        "createdAt": format_datetime(w.created_at),
        "updatedAt": format_datetime(w.updated_at),
    }
