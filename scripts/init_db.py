from __future__ import annotations

import argparse
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from src.workforce_ops.workforce_ops.common.log import configure_logging
from src.workforce_ops.workforce_ops.database.bootstrap import apply_schema, apply_seed_sql, list_tables
from src.workforce_ops.workforce_ops.database.connection import DBConfig

logger = logging.getLogger("workforce_ops.scripts.init_db")

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql to the configured MySQL database.")
    parser.add_argument("--seed", action="store_true", help="also apply database/seed.sql")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")

    logger.info(
        "schema ready -> %s (tables=%s)", DBConfig.from_mapping(db_config).describe(), len(list_tables(db_config))
    )


if __name__ == "__main__":
    main()
