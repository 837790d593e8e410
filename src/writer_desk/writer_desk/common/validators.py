from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import PHONE_DIGITS
from ..core.exceptions import ValidationError

_PHONE_RE = re.compile(rf"[0-9]{{{PHONE_DIGITS}}}")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def is_valid_phone(value: Any) -> bool:
    return isinstance(value, str) and _PHONE_RE.fullmatch(value) is not None


def require_phone(value: Any) -> str:
    if not is_valid_phone(value):
        raise ValidationError("Valid 10-digit phone number required")
    return value


def as_float(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def as_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def as_optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return as_int(value, field_name)
