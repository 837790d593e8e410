from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..achievements.model import WriterAchievement
from ..assignments.model import Assignment
from ..writers.model import Writer


@dataclass(frozen=True)
class WriterPerformance:
    completion_rate: int
    average_rating: float
    on_time_rate: int
    total_earnings: float
    total_paid: float
    pending_payment: float


@dataclass(frozen=True)
class AssignmentCounts:
    total: int
    active: int
    completed: int


@dataclass(frozen=True)
class WriterDashboard:
    writer: Writer
    points: float
    performance: WriterPerformance
    counts: AssignmentCounts
    assignments: Sequence[Assignment]
    achievements: Sequence[WriterAchievement]
    available_assignments: Sequence[Assignment]


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    total_earnings: int
