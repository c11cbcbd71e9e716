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

from src.attendease.attendease.database.bootstrap import apply_seed_sql
from src.attendease.attendease.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))

    apply_seed_sql(DatabaseConnection.get_instance(config), seed_path=REPO_ROOT / "database" / "seed.sql")
    print(f"OK: Seeded database -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
