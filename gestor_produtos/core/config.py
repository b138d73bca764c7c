"""
Configuration helpers for the product manager.

Settings are read once from environment variables so that the store, the
session slot and the HTTP layer never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DB_NAME = "ProductManagementDB"
SCHEMA_VERSION = 1


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: str
    database_url: str
    local_storage_path: str
    seed_demo_user: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    data_dir = os.path.abspath(os.getenv("DATA_DIR") or "data")
    default_url = "sqlite:///" + os.path.join(data_dir, f"{DB_NAME}.sqlite3")
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=data_dir,
        database_url=(os.getenv("DATABASE_URL") or default_url).strip(),
        local_storage_path=os.getenv("LOCAL_STORAGE_PATH") or os.path.join(data_dir, "local_storage.json"),
        seed_demo_user=_bool(os.getenv("SEED_DEMO_USER"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
