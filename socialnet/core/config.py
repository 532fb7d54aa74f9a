"""
Configuration helpers for the socialnet backend.

Settings are read from environment variables once and cached, so routers and
services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_SECRET_KEY = "dev-secret-change-me"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    secret_key: str
    session_ttl_seconds: int
    cookie_secure: bool
    cors_origins: tuple[str, ...]
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_timeout_seconds: float
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    origins = tuple(
        origin.strip().rstrip("/")
        for origin in os.getenv("CORS_ORIGINS", "").split(",")
        if origin.strip()
    )
    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./socialnet.db"),
        secret_key=os.getenv("SECRET_KEY", DEV_SECRET_KEY),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        cookie_secure=_bool(os.getenv("COOKIE_SECURE"), app_env == "prod"),
        cors_origins=origins,
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        cloudinary_timeout_seconds=_float(os.getenv("CLOUDINARY_TIMEOUT_SECONDS", "20"), 20.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
