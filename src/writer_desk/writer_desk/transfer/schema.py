from __future__ import annotations

from typing import Any

from .service import ImportCounts


def import_counts_to_json(counts: ImportCounts) -> dict[str, Any]:
    return {
        "students": counts.students,
        "writers": counts.writers,
        "assignments": counts.assignments,
    }
