"""Offline repair of the assignments table.

Two passes, run with no concurrent writers:

1. rows whose ``id`` is NULL (or the literal string ``'null'``) get a fresh,
   distinct id, addressed by their storage row number;
2. rows sharing (title, writer, student) are collapsed to the one with the most
   advanced status, most recently modified first, the rest are deleted.

Every deletion notifies the stats reconciler. A failure on one row or group is
logged and the pass moves on.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..assignments.status import status_rank
from ..common.ids import new_record_id
from ..stats.reconciler import WriterStatsReconciler

logger = logging.getLogger(__name__)

DuplicateKey = tuple[str, Optional[int], str]


@dataclass
class RepairReport:
    ids_assigned: dict[int, str] = field(default_factory=dict)
    duplicate_groups: int = 0
    kept: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failures: int = 0


def duplicate_key(a: Assignment) -> DuplicateKey:
    return (a.title, a.writer_id, a.student_id)


def survivor_order(a: Assignment) -> tuple[int, datetime]:
    """Completed > In Progress > anything else, then most recently updated."""
    return (status_rank(a.status), a.updated_at or datetime.min)


def pick_survivor(group: Sequence[Assignment]) -> tuple[Assignment, list[Assignment]]:
    ordered = sorted(group, key=survivor_order, reverse=True)
    return ordered[0], ordered[1:]


class DuplicateResolver:
    def __init__(
        self,
        assignments: AssignmentRepository,
        reconciler: WriterStatsReconciler,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._assignments = assignments
        self._reconciler = reconciler
        self._id_factory = id_factory

    def run(self) -> RepairReport:
        report = RepairReport()
        self.repair_missing_ids(report)
        self.remove_duplicates(report)
        logger.info(
            "Data cleanup completed: %d ids assigned, %d duplicate groups, %d deleted, %d failures",
            len(report.ids_assigned),
            report.duplicate_groups,
            len(report.deleted),
            report.failures,
        )
        return report

    def repair_missing_ids(self, report: RepairReport) -> None:
        rows = self._assignments.list_rows_with_missing_id()
        logger.info("Found %d records with missing ids", len(rows))

        issued: set[str] = set()
        for row in rows:
            try:
                new_id = self._fresh_id(issued)
                updated = self._assignments.set_id_for_row(row.row_no, new_id)
            except Exception:
                logger.exception("Could not assign an id to row %s", row.row_no)
                report.failures += 1
                continue
            if not updated:
                logger.warning("Row %s no longer needs an id; skipped", row.row_no)
                continue
            issued.add(new_id)
            report.ids_assigned[row.row_no] = new_id
            logger.info("Assigned id %s to row %s (%s)", new_id, row.row_no, row.title)

    def remove_duplicates(self, report: RepairReport) -> None:
        groups: dict[DuplicateKey, list[Assignment]] = defaultdict(list)
        for a in self._assignments.list_all():
            # Rows the first pass could not repair cannot be addressed by id.
            if not a.assignment_id or a.assignment_id == "null":
                continue
            groups[duplicate_key(a)].append(a)

        for key, group in groups.items():
            if len(group) < 2:
                continue
            report.duplicate_groups += 1
            keep, drop = pick_survivor(group)
            logger.info(
                "Duplicate group %s (%d records): keeping %s (%s), deleting %d",
                key,
                len(group),
                keep.assignment_id,
                keep.status,
                len(drop),
            )
            report.kept.append(keep.assignment_id)

            for d in drop:
                try:
                    self._assignments.delete_by_id(d.assignment_id)
                except Exception:
                    logger.exception("Could not delete duplicate %s", d.assignment_id)
                    report.failures += 1
                    continue
                report.deleted.append(d.assignment_id)
                logger.info("Deleted %s", d.assignment_id)
                self._reconciler.on_assignment_changed(d, None)

    def _fresh_id(self, issued: set[str]) -> str:
        candidate = self._id_factory()
        while candidate in issued or self._assignments.get_by_id(candidate) is not None:
            candidate = self._id_factory()
        return candidate
