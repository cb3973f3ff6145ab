from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_config import configure_logging
from .container import Container, build_container
from .core.enums import StoreBackend
from .core.settings import ScannerSettings
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .persons.controller import register as register_persons
from .stats.controller import register as register_stats
from .workflow.controller import register as register_workflow

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def _prepare_database(settings: Any, scanner_settings: ScannerSettings) -> None:
    db_config = scanner_settings.db_config
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        logger.info("Demo seed ready")


def create_app(settings: Optional[Any] = None, *, container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``settings`` is a settings module/object (defaults to the one selected by
    APP_ENV); ``container`` lets tests inject pre-built services.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_name = getattr(settings, "__name__", type(settings).__name__)
    if settings is None:
        settings_name = get_settings_module()
        settings = importlib.import_module(settings_name)

    scanner_settings = container.settings if container else ScannerSettings.from_module(settings)
    configure_logging(scanner_settings.log_level)

    app.secret_key = getattr(settings, "SECRET_KEY", "dev-secret-key")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    db = scanner_settings.db_config
    logger.info(
        "settings=%s backend=%s db=%s@%s:%s/%s tz=%s policy=%s-%s absence=%s",
        settings_name,
        scanner_settings.store_backend.value,
        db.get("user"),
        db.get("host"),
        db.get("port", 3306),
        db.get("database"),
        scanner_settings.timezone.key,
        scanner_settings.present_before.strftime("%H:%M"),
        scanner_settings.late_before.strftime("%H:%M"),
        scanner_settings.absence_policy.value,
    )

    if container is None:
        if scanner_settings.store_backend == StoreBackend.MYSQL:
            _prepare_database(settings, scanner_settings)
        container = build_container(settings=scanner_settings)

    app.extensions["attendance_scanner"] = container
    atexit.register(container.sessions.close_all)

    register_persons(app, container)
    register_attendance(app, container)
    register_stats(app, container)
    register_workflow(app, container)

    return app
