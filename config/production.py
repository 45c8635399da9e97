import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", "please-set-AUTH_JWT_SECRET")
AUTH_JWT_ALGORITHMS = Config.AUTH_JWT_ALGORITHMS
AUTH_JWT_AUDIENCE = Config.AUTH_JWT_AUDIENCE

GEOFENCE_RADIUS_METERS = Config.GEOFENCE_RADIUS_METERS

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
