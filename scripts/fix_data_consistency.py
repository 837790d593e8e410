"""Repair assignments: give id-less rows an id, then drop duplicate jobs.

Run offline (nothing else writing to the database).
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.writer_desk.writer_desk.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        admin_password=str(settings.ADMIN_PASSWORD),
        reconcile_previous_writer=bool(getattr(settings, "RECONCILE_PREVIOUS_WRITER", False)),
    )
    report = container.duplicate_resolver.run()

    print(
        "OK: Data consistency fixed -> "
        f"ids assigned={len(report.ids_assigned)}, duplicate groups={report.duplicate_groups}, "
        f"deleted={len(report.deleted)}, failures={report.failures}"
    )
    if report.failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
