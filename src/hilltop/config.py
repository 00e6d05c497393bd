import os
from functools import lru_cache


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hilltop_prod.sqlite")

    APP_NAME = "DevOps with Hilltop"
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    ENVIRONMENT = "production"
    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    SEED_DEFAULT_DATA = _as_bool(os.getenv("SEED_DEFAULT_DATA", "true"))

    # Only applied to server databases; SQLite uses SQLAlchemy's defaults.
    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "10"))

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5000"))


class DevSettings(Settings):
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hilltop_dev.sqlite")
    ENVIRONMENT = "development"
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestSettings(Settings):
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hilltop_test.sqlite")
    ENVIRONMENT = "test"
    DEBUG = True
    SEED_DEFAULT_DATA = _as_bool(os.getenv("SEED_DEFAULT_DATA", "false"))


@lru_cache
def get_settings():
    env = os.getenv("ENV", "dev")
    if env == "test":
        return TestSettings()
    if env == "dev":
        return DevSettings()
    return Settings()
