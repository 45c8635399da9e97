from .config import Config

SECRET_KEY = "test-secret"
DB_CONFIG = Config.db_config()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTH_JWT_SECRET = "test-jwt-secret"
AUTH_JWT_ALGORITHMS = ("HS256",)
AUTH_JWT_AUDIENCE = None

GEOFENCE_RADIUS_METERS = 50

AUTO_INIT_DB = False
AUTO_SEED_DB = False
