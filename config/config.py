import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


def _csv(name: str, default: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in os.environ.get(name, default).split(",") if part.strip())


class Config:
    """Values shared by every environment. Each settings module picks from here."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "workforce_ops")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # ID tokens from the identity provider; shared secret or public key.
    AUTH_JWT_SECRET = os.environ.get("AUTH_JWT_SECRET", "change-me-jwt")
    AUTH_JWT_ALGORITHMS = _csv("AUTH_JWT_ALGORITHMS", "HS256")
    AUTH_JWT_AUDIENCE = os.environ.get("AUTH_JWT_AUDIENCE") or None

    GEOFENCE_RADIUS_METERS = int(os.environ.get("GEOFENCE_RADIUS_METERS", "50"))

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
