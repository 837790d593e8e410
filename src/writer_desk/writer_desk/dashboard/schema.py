from __future__ import annotations

from typing import Any

from ..achievements.schema import achievement_to_json
from ..assignments.schema import assignment_to_writer_json, available_to_json
from .model import LeaderboardEntry, WriterDashboard


def dashboard_to_json(d: WriterDashboard) -> dict[str, Any]:
    p = d.performance
    return {
        "writer": {
            "id": d.writer.writer_id,
            "name": d.writer.name,
            "phone": d.writer.phone,
            "level": d.writer.level,
            "points": d.points,
            "rating": p.average_rating,
            "streak": d.writer.streak,
        },
        "performance": {
            "completionRate": p.completion_rate,
            "averageRating": p.average_rating,
            "onTimeRate": p.on_time_rate,
            "totalEarnings": p.total_earnings,
            "totalPaid": p.total_paid,
            "pendingPayment": p.pending_payment,
        },
        "assignments": [assignment_to_writer_json(a) for a in d.assignments],
        "achievements": [achievement_to_json(a) for a in d.achievements],
        "availableAssignments": [available_to_json(a) for a in d.available_assignments],
        "stats": {
            "total": d.counts.total,
            "active": d.counts.active,
            "completed": d.counts.completed,
        },
    }


def leaderboard_to_json(entries) -> list[dict[str, Any]]:
    return [{"name": e.name, "totalEarnings": e.total_earnings} for e in entries]
