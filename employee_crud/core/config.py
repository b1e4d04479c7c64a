"""
Configuration helpers for the employee backend.

Routers/services read settings from here instead of touching os.environ
directly (storage path, CORS, server bind, logging).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    db_file: Path
    reset_on_corrupt: bool
    cors_origins: tuple[str, ...]
    host: str
    port: int
    log_level: str
    log_format: str


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

    def _origins(value: str | None) -> tuple[str, ...]:
        items = [item.strip().rstrip("/") for item in (value or "*").split(",")]
        return tuple(item for item in items if item) or ("*",)

    data_dir = Path(os.getenv("DATA_DIR") or "data")
    db_file = os.getenv("EMPLOYEES_DB_FILE")
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=data_dir,
        db_file=Path(db_file) if db_file else data_dir / "db.json",
        reset_on_corrupt=_bool(os.getenv("RESET_ON_CORRUPT"), True),
        cors_origins=_origins(os.getenv("CORS_ORIGINS")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=(os.getenv("LOG_FORMAT") or "text").lower(),
    )
