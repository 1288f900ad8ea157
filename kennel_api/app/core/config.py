"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  A single
module level ``settings`` instance backs the default application, but
nothing below the HTTP layer imports it: the database helper and the
dog service receive their ``Settings`` through their constructors, so
tests and alternative deployments can build isolated instances.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Kennel Dog Roster API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # Path to the SQLite database file.  Can be overridden via the
    # ``DATABASE_URL`` environment variable.  If a relative path is
    # provided, it will be resolved relative to the project root by the
    # ``db`` module.  ``:memory:`` is not usable because every service
    # operation opens its own connection.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "kennel.db"))

    @classmethod
    def from_env(cls) -> "Settings":
        """Build a fresh instance from the current environment."""
        return cls()


# Instantiate settings once so the application entrypoint can import it
# without repeatedly reading environment variables.
settings = Settings()
