from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from src.workforce_ops.workforce_ops.common.log import configure_logging
from src.workforce_ops.workforce_ops.database.bootstrap import apply_seed_sql
from src.workforce_ops.workforce_ops.database.connection import DBConfig

logger = logging.getLogger("workforce_ops.scripts.seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    logger.info("seeded -> %s", DBConfig.from_mapping(db_config).describe())


if __name__ == "__main__":
    main()
