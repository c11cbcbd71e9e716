from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.process_settings import ProcessSettings
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .movement.controller import register as register_movement
from .reminders.controller import register as register_reminders

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app. Tests pass a container of fakes and skip the database."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = ProcessSettings.from_module(importlib.import_module(settings_module))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["CRON_SECRET"] = settings.cron_secret
    app.config["APP_NAME"] = settings.app_name

    if container is None:
        db = settings.db_config
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db.get("user"),
            db.get("host"),
            db.get("port", 3306),
            db.get("database"),
        )
        container = build_container(settings)
        if settings.auto_init_db:
            apply_schema(container.conn, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))
        if settings.auto_seed_db:
            apply_seed_sql(container.conn, seed_path=DATABASE_DIR / "seed.sql")

    register_attendance(app, container)
    register_movement(app, container)
    register_reminders(app, container)

    return app
