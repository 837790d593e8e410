from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from ..core.exceptions import ValidationError

# camelCase wire name -> (snake_case field name, converter)
FieldSpec = Mapping[str, tuple[str, Optional[Callable[[Any], Any]]]]


def filter_payload(payload: Any, spec: FieldSpec) -> dict[str, Any]:
    """Keep only whitelisted wire fields, renamed and converted for the domain layer.

    Unknown keys are dropped silently, matching how the admin UI sends whole
    objects back on edit.
    """

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    out: dict[str, Any] = {}
    for wire_name, (field_name, convert) in spec.items():
        if wire_name not in payload:
            continue
        value = payload[wire_name]
        out[field_name] = convert(value) if convert else value
    return out


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
