"""Workforce operations service.

Feature modules (attendance, geofence, workdays, overtime, payroll, users)
each own a model, repository protocols, MySQL repositories, a service and a
thin Flask controller. ``create_app`` wires them together.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .common.log import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .overtime.controller import register as register_overtime
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .workdays.controller import register as register_workdays

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("[workforce-ops] schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("[workforce-ops] demo seed ready")


def create_app(*, container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Passing a prebuilt ``container`` skips database bootstrap entirely, which
    is how the tests run the HTTP layer against in-memory repositories.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "[workforce-ops] settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe()
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "AUTH_JWT_SECRET"),
            jwt_algorithms=getattr(settings, "AUTH_JWT_ALGORITHMS", ("HS256",)),
            jwt_audience=getattr(settings, "AUTH_JWT_AUDIENCE", None),
            geofence_radius_meters=int(getattr(settings, "GEOFENCE_RADIUS_METERS", DEFAULT_GEOFENCE_RADIUS_METERS)),
        )

    app.extensions["workforce_ops.container"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_workdays(app, container)
    register_overtime(app, container)
    register_payroll(app, container)
    register_users(app, container)

    return app
