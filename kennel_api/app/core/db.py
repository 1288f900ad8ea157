"""
SQLite database integration.

This module provides the ``Database`` helper used by the service layer:
it resolves the database path from the injected ``Settings``, opens
connections with a row factory so columns can be addressed by name,
and bootstraps the ``dogs`` table on application start (``init_db``).

There is no versioned migration system; ``init_db`` only issues
idempotent ``CREATE ... IF NOT EXISTS`` statements.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import Settings

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS dogs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    breed TEXT NOT NULL,
    supplier TEXT DEFAULT '',
    badge_id INTEGER NOT NULL UNIQUE,
    gender TEXT DEFAULT '',
    birth_date DATE,
    date_acquired DATE,
    status TEXT NOT NULL,
    leaving_date DATE,
    leaving_reason TEXT DEFAULT '',
    kenneling_characteristics TEXT DEFAULT '',
    date_deleted DATE
);

CREATE INDEX IF NOT EXISTS idx_dogs_date_deleted ON dogs(date_deleted);
"""


class Database:
    """Connection factory bound to one ``Settings`` instance."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def path(self) -> str:
        """Compute the path to the SQLite database file.

        If ``settings.database_url`` is an absolute path, use it directly.
        Otherwise resolve it relative to the project root.
        """
        db_url = self.settings.database_url
        if os.path.isabs(db_url):
            return db_url
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return str((base_dir / db_url).resolve())

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        No type detection is enabled: dates come back as the ISO
        strings they were stored as and are parsed by the pydantic
        schemas.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, roll back on error, always close."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the ``dogs`` table and its index if they do not exist."""
        with self.get_cursor() as cursor:
            cursor.executescript(SCHEMA)
        logger.info("Database ready at %s", self.path)
