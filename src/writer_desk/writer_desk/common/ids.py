from __future__ import annotations

import secrets
import string

from ..core.constants import ID_LENGTH

_ALPHABET = string.digits + string.ascii_lowercase


def new_record_id() -> str:
    """Random opaque identifier: 9 base-36 characters."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(ID_LENGTH))
