from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_local
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_TTL_HOURS
from .database.bootstrap import apply_schema, ensure_admin_user, ensure_demo_data, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _bootstrap_database(app: Flask, settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        ensure_admin_user(
            db_config,
            username=getattr(settings, "ADMIN_USERNAME", "admin"),
            password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
        )
        app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_data(db_config)
        app.logger.info("demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a prebuilt container skips database bootstrap (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False
    app.logger.setLevel(getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )
        _bootstrap_database(app, settings, db_config)
        container = build_container(
            db_config=db_config,
            token_secret=app.secret_key,
            token_ttl_hours=int(getattr(settings, "TOKEN_TTL_HOURS", DEFAULT_TOKEN_TTL_HOURS)),
        )

    app.extensions["time_clock"] = container
    register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": now_local().isoformat(timespec="seconds")})

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
