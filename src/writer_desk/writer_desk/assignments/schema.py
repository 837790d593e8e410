from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import format_datetime, parse_datetime
from ..common.payload import FieldSpec, as_bool, as_optional_str
from ..common.validators import as_float, as_int, as_optional_int
from ..core.exceptions import ValidationError
from .model import Assignment


def _datetime(field_name: str):
    def convert(value: Any):
        try:
            return parse_datetime(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO-8601 date")

    return convert


def _number(field_name: str):
    return lambda value: as_float(value, field_name)


def _list(value: Any) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError("Log fields must be JSON arrays")
    return list(value)


def _optional_list(value: Any) -> Optional[list]:
    return None if value is None else _list(value)


ASSIGNMENT_FIELDS: FieldSpec = {
    "studentId": ("student_id", as_optional_str),
    "writerId": ("writer_id", lambda v: as_optional_int(v, "writerId")),
    "title": ("title", None),
    "type": ("type", None),
    "subject": ("subject", None),
    "level": ("level", None),
    "deadline": ("deadline", _datetime("deadline")),
    "status": ("status", None),
    "priority": ("priority", None),
    "documentLink": ("document_link", as_optional_str),
    "wordCount": ("word_count", lambda v: as_int(v, "wordCount")),
    "costPerWord": ("cost_per_word", _number("costPerWord")),
    "writerCostPerWord": ("writer_cost_per_word", _number("writerCostPerWord")),
    "price": ("price", _number("price")),
    "paidAmount": ("paid_amount", _number("paidAmount")),
    "writerPrice": ("writer_price", _number("writerPrice")),
    "writerPaidAmount": ("writer_paid_amount", _number("writerPaidAmount")),
    "sunkCosts": ("sunk_costs", _number("sunkCosts")),
    "isDissertation": ("is_dissertation", as_bool),
    "totalChapters": ("total_chapters", lambda v: as_optional_int(v, "totalChapters")),
    "chapters": ("chapters", _optional_list),
    "description": ("description", None),
    "activityLog": ("activity_log", _list),
    "paymentHistory": ("payment_history", _list),
    "statusHistory": ("status_history", _list),
    "attachments": ("attachments", _list),
    "isArchived": ("is_archived", as_bool),
}

# Import/restore keeps ids and timestamps as exported.
ASSIGNMENT_IMPORT_FIELDS: FieldSpec = {
    "id": ("assignment_id", as_optional_str),
    **ASSIGNMENT_FIELDS,
    "completedAt": ("completed_at", _datetime("completedAt")),
    "createdAt": ("created_at", _datetime("createdAt")),
    "updatedAt": ("updated_at", _datetime("updatedAt")),
}

REQUIRED_ON_CREATE = ("student_id", "title", "type", "subject", "level", "deadline")

_WIRE_NAMES = {field_name: wire for wire, (field_name, _) in ASSIGNMENT_IMPORT_FIELDS.items()}


def wire_name(field_name: str) -> str:
    return _WIRE_NAMES.get(field_name, field_name)


def assignment_to_json(a: Assignment) -> dict[str, Any]:
    return {
        "id": a.assignment_id,
        "studentId": a.student_id,
        "writerId": a.writer_id,
        "title": a.title,
        "type": a.type,
        "subject": a.subject,
        "level": a.level,
        "deadline": format_datetime(a.deadline),
        "completedAt": format_datetime(a.completed_at),
        "status": a.status,
        "priority": a.priority,
        "documentLink": a.document_link,
        "wordCount": a.word_count,
        "costPerWord": a.cost_per_word,
        "writerCostPerWord": a.writer_cost_per_word,
        "price": a.price,
        "paidAmount": a.paid_amount,
        "writerPrice": a.writer_price,
        "writerPaidAmount": a.writer_paid_amount,
        "sunkCosts": a.sunk_costs,
        "isDissertation": a.is_dissertation,
        "totalChapters": a.total_chapters,
        "chapters": a.chapters,
        "description": a.description,
        "activityLog": a.activity_log,
        "paymentHistory": a.payment_history,
        "statusHistory": a.status_history,
        "attachments": a.attachments,
        "isArchived": a.is_archived,
        "createdAt": format_datetime(a.created_at),
        "updatedAt": format_datetime(a.updated_at),
    }


def assignment_to_writer_json(a: Assignment) -> dict[str, Any]:
    """What a writer may see: no student details, no client pricing."""

    return {
        "id": a.assignment_id,
        "title": a.title,
        "subject": a.subject,
        "writerPrice": a.writer_price,
        "writerPaidAmount": a.writer_paid_amount,
        "status": a.status,
        "deadline": format_datetime(a.deadline),
        "createdAt": format_datetime(a.created_at),
        "updatedAt": format_datetime(a.updated_at),
        "completedAt": format_datetime(a.completed_at),
    }


def available_to_json(a: Assignment) -> dict[str, Any]:
    return {
        "id": a.assignment_id,
        "title": a.title,
        "subject": a.subject,
        "writerPrice": a.writer_price,
        "deadline": format_datetime(a.deadline),
        "createdAt": format_datetime(a.created_at),
    }
