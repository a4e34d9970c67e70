"""
Configuration helpers for the catalog backend.

Settings are read once from environment variables so that routers/services do
not fetch os.environ directly. Call ``get_settings.cache_clear()`` after
changing the environment (tests do this through monkeypatch).
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_dir: Path
    host: str
    port: int
    cors_origins: tuple[str, ...]
    log_level: str
    wait_for_flush: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    origins = tuple(
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    )
    default_level = "DEBUG" if app_env == "dev" else "INFO"
    return Settings(
        app_env=app_env,
        database_dir=Path(os.getenv("DATABASE_DIR", "database")).expanduser().resolve(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3001"), 3001),
        cors_origins=origins,
        log_level=(os.getenv("LOG_LEVEL") or default_level).upper(),
        wait_for_flush=_bool(os.getenv("WAIT_FOR_FLUSH"), False),
    )
