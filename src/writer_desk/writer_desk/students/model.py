from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a client of the brokerage."""

    student_id: str
    name: str
    email: str
    phone: str
    university: Optional[str] = None
    remarks: Optional[str] = None
    is_flagged: bool = False
    referred_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
