import os
from typing import Optional


def parse_timeout(value: Optional[str]) -> Optional[float]:
    """Seconds from an env value; blank, zero or malformed means no timeout."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds > 0 else None


class Config:
    """Default settings; every value can be overridden from the environment."""

    # Remote users API. Requests use the transport's default timeout unless
    # USER_API_TIMEOUT is set.
    API_BASE_URL = os.getenv("USER_API_BASE_URL", "http://localhost:8080")
    API_TIMEOUT = parse_timeout(os.getenv("USER_API_TIMEOUT"))
    API_CLIENT_FACTORY = None

    SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "your_super_secret_key")  # change for production
    VIEW_STORE_LIMIT = int(os.getenv("VIEW_STORE_LIMIT", "256"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    API_BASE_URL = "http://api.test"
    API_TIMEOUT = None
    VIEW_STORE_LIMIT = 8
