"""
Logging configuration for the application.

``setup_logging`` configures the root logger from ``Settings``: a
console handler, a file handler when ``log_file`` is set, and the level
from ``log_level`` (forced to ``DEBUG`` when ``debug`` is on).  The
``kennel_api`` logger is returned so callers can announce startup.
Handlers are only attached the first time.
"""

import logging
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(settings: Settings) -> int:
    """Numeric level for ``settings``; unknown names fall back to INFO."""
    if settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings) -> logging.Logger:
    root = logging.getLogger()
    app_logger = logging.getLogger("kennel_api")
    if root.handlers:
        # Already configured, e.g. by pytest or by an earlier create_app().
        return app_logger

    root.setLevel(resolve_level(settings))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    app_logger.debug(
        "Logging configured: level=%s file=%s",
        logging.getLevelName(root.level),
        settings.log_file or "-",
    )
    return app_logger
