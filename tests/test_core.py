"""
Unit tests for configuration, logging setup and the database helper.
"""

import logging
import os

from kennel_api.app.core.config import Settings
from kennel_api.app.core.db import Database
from kennel_api.app.core.logging_config import resolve_level, setup_logging


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "/tmp/other.db")
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings.from_env()

    assert settings.database_url == "/tmp/other.db"
    assert settings.debug is True
    assert settings.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "DEBUG", "PROJECT_NAME", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.database_url == "kennel.db"
    assert settings.debug is False
    assert settings.project_name == "Kennel Dog Roster API"
    assert settings.log_file == ""


def test_relative_database_path_is_resolved():
    database = Database(Settings(database_url="data/kennel.db"))

    assert os.path.isabs(database.path)
    assert database.path.endswith(os.path.join("data", "kennel.db"))


def test_init_db_is_idempotent(database):
    database.init_db()

    with database.get_cursor() as cursor:
        columns = [row["name"] for row in cursor.execute("PRAGMA table_info(dogs)").fetchall()]

    assert columns[0] == "id"
    assert "badge_id" in columns
    assert "date_deleted" in columns


def test_get_cursor_rolls_back_on_error(database):
    try:
        with database.get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO dogs (name, breed, badge_id, status) VALUES ('A', 'B', 1, 'left')"
            )
            raise RuntimeError("abort")
    except RuntimeError:
        pass

    with database.get_cursor() as cursor:
        assert cursor.execute("SELECT COUNT(*) FROM dogs").fetchone()[0] == 0


def test_setup_logging_adds_handlers_once(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    logfile = tmp_path / "kennel.log"

    logger = setup_logging(Settings(log_level="debug", log_file=str(logfile)))
    setup_logging(Settings(log_level="info", log_file=str(logfile)))

    try:
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG
        assert logger.name == "kennel_api"
        logging.getLogger("kennel_api.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        assert "hello" in logfile.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()


def test_resolve_level():
    assert resolve_level(Settings(log_level="warning", debug=False)) == logging.WARNING
    assert resolve_level(Settings(log_level="warning", debug=True)) == logging.DEBUG
    assert resolve_level(Settings(log_level="chatty", debug=False)) == logging.INFO
