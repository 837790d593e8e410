from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def decode_json(value: Any, default: Any = None) -> Any:
    """Normalize MySQL JSON values across connector implementations.

    mysql-connector can return JSON as:
    - str (pure-python connector)
    - bytes/bytearray (C extension)
    - an already decoded object (when a converter is installed)
    """

    if value is None:
        return default

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        if not value.strip():
            return default
        try:
            return json.loads(value)
        except ValueError:
            # Legacy rows stored plain numbers/text in JSON-ish columns.
            return value

    return value


def encode_json(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, default=str)


def placeholders(values) -> str:
    return ",".join(["%s"] * len(values))
