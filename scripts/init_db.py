from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from qr_attendance.config import get_settings_module
from qr_attendance.core.app_logger import setup_logging
from qr_attendance.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    log = setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    log.info(
        "applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"), len(tables),
    )


if __name__ == "__main__":
    main()
