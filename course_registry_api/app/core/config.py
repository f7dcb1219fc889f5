"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, with defaults for every field, so the API can
be started without any configuration file.  In a deployment the
values are overridden through the environment (for example from a
``.env`` file loaded by the process manager).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Course Registry API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the SQLite database file.  A relative path is resolved
    # against the package root by ``core.db.get_database_path``.
    database_url: str = os.getenv("DATABASE_URL", "course_registry.db")

    # Insert the demo courses ("Go Programming", "Web Development") when
    # the schema is initialised.  Existing courses are left alone.
    seed_courses: bool = os.getenv("SEED_COURSES", "false").lower() in {"1", "true", "yes"}

    # Transport settings used by ``run.py`` when serving with uvicorn.
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    keep_alive_timeout: int = int(os.getenv("KEEP_ALIVE_TIMEOUT", "15"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before this module is imported.
settings = Settings()
