from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session roles used for authorization."""

    ADMIN = "admin"
    WRITER = "writer"


class AssignmentStatus(str, Enum):
    """Canonical assignment statuses.

    Stored status is free text; historic rows use other casings ("completed").
    Compare through ``assignments.status`` helpers, never with ``==``.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    UNDER_REVIEW = "Under Review"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AssignmentPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class WriterLevel(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    VACATION = "vacation"


class AchievementType(str, Enum):
    SPEED_DEMON = "SpeedDemon"
    PERFECTIONIST = "Perfectionist"
    STREAK_MASTER = "StreakMaster"
    QUALITY_CHAMPION = "QualityChampion"
