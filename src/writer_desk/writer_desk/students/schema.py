from __future__ import annotations

from typing import Any

from ..common.datetime_utils import format_datetime
from ..common.payload import FieldSpec, as_bool, as_optional_str
from .model import Student

STUDENT_FIELDS: FieldSpec = {
    "name": ("name", None),
    "email": ("email", None),
    "phone": ("phone", None),
    "university": ("university", as_optional_str),
    "remarks": ("remarks", as_optional_str),
    "isFlagged": ("is_flagged", as_bool),
    "referredBy": ("referred_by", as_optional_str),
}

STUDENT_IMPORT_FIELDS: FieldSpec = {
    "id": ("student_id", as_optional_str),
    **STUDENT_FIELDS,
}


def student_to_json(s: Student) -> dict[str, Any]:
    return {
        "id": s.student_id,
        "name": s.name,
        "email": s.email,
        "phone": s.phone,
        "university": s.university,
        "remarks": s.remarks,
        "isFlagged": s.is_flagged,
        "referredBy": s.referred_by,
        "createdAt": format_datetime(s.created_at),
        "updatedAt": format_datetime(s.updated_at),
    }
