"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for everything except
the database connection string, which must be supplied through
``DATABASE_URL`` before the application starts serving requests.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Music Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Routes are mounted under this prefix.  Empty by default so that the
    # song endpoints live at ``/songs``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # Path or ``sqlite:///`` URL of the SQLite database.  There is no
    # default: startup aborts when it is missing.  Relative paths are
    # resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT") or "8080")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()
