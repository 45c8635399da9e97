import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DB_CONFIG = Config.db_config()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

AUTH_JWT_SECRET = Config.AUTH_JWT_SECRET
AUTH_JWT_ALGORITHMS = Config.AUTH_JWT_ALGORITHMS
AUTH_JWT_AUDIENCE = Config.AUTH_JWT_AUDIENCE

GEOFENCE_RADIUS_METERS = Config.GEOFENCE_RADIUS_METERS

# Applies database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = Config.AUTO_SEED_DB
