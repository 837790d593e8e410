from __future__ import annotations

from datetime import datetime
from typing import Any, Optional


def now_local() -> datetime:
    """Current local time, truncated to millisecond precision.

    Note: Wrapped so tests can patch/mocked easier. DATETIME(3) columns keep
    milliseconds only, so values are truncated here to round-trip unchanged.
    """
    now = datetime.now()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the JSON API into a naive datetime.

    Accepts datetimes as-is, ``None``/empty as ``None``, and strings such as
    ``2026-02-01T10:00:00.000Z`` or ``2026-02-01``. Aware values are converted
    to local time and made naive (MySQL DATETIME has no zone).
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid datetime value: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")
