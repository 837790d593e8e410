from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AssignmentPriority, AssignmentStatus


@dataclass(frozen=True)
class Assignment:
    """Domain entity: a job ordered by a student and optionally handed to a writer.

    ``assignment_id`` is ``None`` only on corrupted legacy rows; ``row_no`` is the
    storage row reference used to repair them.
    """

    assignment_id: Optional[str]
    student_id: str
    title: str
    type: str
    subject: str
    level: str
    deadline: Optional[datetime]
    writer_id: Optional[int] = None
    status: str = AssignmentStatus.PENDING.value
    priority: str = AssignmentPriority.MEDIUM.value
    completed_at: Optional[datetime] = None

    document_link: Optional[str] = None
    word_count: int = 0
    cost_per_word: float = 0.0
    writer_cost_per_word: float = 0.0

    # Owed by the student / paid by the student.
    price: float = 0.0
    paid_amount: float = 0.0
    # Owed to the writer / paid to the writer.
    writer_price: float = 0.0
    writer_paid_amount: float = 0.0
    sunk_costs: float = 0.0

    is_dissertation: bool = False
    total_chapters: Optional[int] = None
    chapters: Optional[list[Any]] = None
    description: Optional[str] = None

    # Append-only logs, oldest first.
    activity_log: list[Any] = field(default_factory=list)
    payment_history: list[Any] = field(default_factory=list)
    status_history: list[Any] = field(default_factory=list)
    attachments: list[Any] = field(default_factory=list)
    is_archived: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    row_no: Optional[int] = None
