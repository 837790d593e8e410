from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WriterStats:
    """Derived counters cached on the writer row."""

    total_assignments: int
    completed_assignments: int
    on_time_deliveries: int
