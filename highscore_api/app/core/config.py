"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration at all.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Highscore API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the installation directory by the ``db`` module, never
    # against the current working directory.
    database_url: str = os.getenv("DATABASE_URL", "highscores.db")

    # Upper bound on pooled connections.  Also used as the number of
    # seconds to wait for a free connection and for SQLite's busy
    # timeout when another writer holds the lock.
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5.0"))

    # Insert the demo record into an empty table on startup.
    seed_demo: bool = _env_flag("SEED_DEMO")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
