from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.writer_desk.writer_desk.container import build_container
from src.writer_desk.writer_desk.database.bootstrap import apply_seed_sql


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)

    # Seed rows carry no counters; derive them like any other write would.
    container = build_container(db_config=db_config, admin_password=str(settings.ADMIN_PASSWORD))
    writers = container.writers_repo.list_all()
    for writer in writers:
        container.reconciler.recompute(writer.writer_id)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(writers reconciled={len(writers)})"
    )


if __name__ == "__main__":
    main()
