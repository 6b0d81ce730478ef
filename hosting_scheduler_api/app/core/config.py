"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup, but ``SITE_PASSWORD``
and ``SECRET_KEY`` must be set before anyone can log in.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Hosting Scheduler API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Signing key for access tokens.  Login is refused while this is empty.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET", ""))
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Shared password that unlocks write access for the whole site.
    site_password: str = os.getenv("SITE_PASSWORD", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "database/hosting_slots.db")
    # Seconds a statement waits on a locked database before failing.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5"))

    # IANA zone that defines "today" for past-date checks and listings.
    timezone: str = os.getenv("APP_TIMEZONE", "America/Chicago")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))


# Instantiated once for the default application.  Environment variables
# must be set before this module is imported.
settings = Settings()
