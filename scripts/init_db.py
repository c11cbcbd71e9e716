from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendease.attendease.database.bootstrap import apply_schema, list_tables
from src.attendease.attendease.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    count = apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    print(
        f"OK: Applied schema.sql ({count} statements) -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
