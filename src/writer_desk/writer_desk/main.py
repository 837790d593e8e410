from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import DEFAULT_WRITER_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_legacy_columns, list_tables

from .container import Container, build_container
from .assignments.controller import register as register_assignments
from .auth.controller import register as register_auth
from .dashboard.controller import register as register_dashboard
from .students.controller import register as register_students
from .transfer.controller import register as register_transfer
from .writers.controller import register as register_writers

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def register_routes(app: Flask, container: Container) -> None:
    register_auth(app, container)
    register_students(app, container)
    register_writers(app, container)
    register_assignments(app, container)
    register_dashboard(app, container)
    register_transfer(app, container)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    writer_session_days = int(getattr(settings, "WRITER_SESSION_DAYS", DEFAULT_WRITER_SESSION_DAYS))
    # Cookie lifetime is the longest session; shorter admin sessions expire via the guard.
    app.permanent_session_lifetime = timedelta(days=writer_session_days)

    if container is None:
        container = _build_from_settings(settings, writer_session_days=writer_session_days)

    register_routes(app, container)
    return app


def _build_from_settings(settings, *, writer_session_days: int) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings.__name__,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        added = ensure_legacy_columns(db_config)
        logger.info("schema ready (tables=%d, columns added=%s)", len(list_tables(db_config)), added or "none")

    container = build_container(
        db_config=db_config,
        admin_password=str(getattr(settings, "ADMIN_PASSWORD")),
        writer_session_days=writer_session_days,
        reconcile_previous_writer=bool(getattr(settings, "RECONCILE_PREVIOUS_WRITER", False)),
    )

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        for writer in container.writers_repo.list_all():
            container.reconciler.recompute(writer.writer_id)
        logger.info("demo seed ready")

    return container
