from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, redirect, url_for

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.app_logger import setup_logging
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .scanner.controller import register as register_scanner
from .students.controller import register as register_students

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["BEEP_SOUND"] = getattr(settings, "BEEP_SOUND", "beep.wav")

    log = setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    log.info("starting with settings=%s", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log.info(
            "db=%s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            log.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            debounce_ms=int(getattr(settings, "SCAN_DEBOUNCE_MS", 500)),
            enforce_daily_limit=bool(getattr(settings, "ENFORCE_DAILY_LIMIT", False)),
            session_ttl_s=float(getattr(settings, "SCAN_SESSION_TTL_S", 1800)),
        )

    app.extensions["container"] = container

    register_scanner(app, container)
    register_students(app, container)
    register_attendance(app, container)

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("scan_page"))

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    create_app().run()
