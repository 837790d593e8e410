from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.constants import DEFAULT_MAX_CONCURRENT_TASKS, DEFAULT_RATING
from ..core.enums import AvailabilityStatus, WriterLevel


@dataclass(frozen=True)
class Writer:
    """Domain entity: a contractor who takes assignments.

    ``rating`` is whatever the store holds: normally a dict with quality /
    punctuality / communication / reliability / count, but legacy rows may have a
    bare number. The three counters are derived from assignments (see
    ``stats.reconciler``) and must not be edited directly.
    """

    writer_id: int
    name: str
    phone: Optional[str]
    email: Optional[str] = None
    specialty: Optional[str] = None
    is_flagged: bool = False
    rating: Any = field(default_factory=lambda: dict(DEFAULT_RATING))
    availability_status: str = AvailabilityStatus.AVAILABLE.value
    max_concurrent_tasks: int = DEFAULT_MAX_CONCURRENT_TASKS
    total_assignments: int = 0
    completed_assignments: int = 0
    on_time_deliveries: int = 0
    level: str = WriterLevel.BRONZE.value
    points: int = 0
    streak: int = 0
    last_active: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
