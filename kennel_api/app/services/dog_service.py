"""
Service layer for the dog roster.

``DogService`` implements listing, lookup, creation, partial update and
soft deletion of rows in the ``dogs`` table.  It is constructed with a
``Database`` so that connection settings are injected rather than read
from globals.  Each public method opens one connection for its own
duration and always closes it.

All queries use parameterized statements.  Partial updates are
expressed as a ``{column: value}`` mapping and turned into SQL by
``build_update_statement``, which only accepts whitelisted column
names.

Failures are reported with the exceptions from
``kennel_api.app.core.errors``; storage errors and anything unexpected
are wrapped into ``DogServiceError`` with the original exception
chained.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Tuple

from kennel_api.app.core.db import Database
from kennel_api.app.core.errors import (
    DogError,
    DogNotFoundError,
    DogServiceError,
    DogValidationError,
)
from kennel_api.app.schemas.dog import (
    LEAVING_REASONS,
    STATUSES,
    DogCreate,
    DogRead,
    DogUpdate,
)

logger = logging.getLogger(__name__)

# Columns a caller may write.  ``id`` and ``date_deleted`` are managed
# by the service.
WRITABLE_COLUMNS = (
    "name",
    "breed",
    "supplier",
    "badge_id",
    "gender",
    "birth_date",
    "date_acquired",
    "status",
    "leaving_date",
    "leaving_reason",
    "kenneling_characteristics",
)

# Largest value SQLite can bind as INTEGER.
SQLITE_MAX_INTEGER = 2**63 - 1

DUPLICATE_BADGE_MESSAGE = (
    "Dog badge ID already exists. Please check and try again or "
    "use the PUT method to update the existing record."
)


def _format_choices(choices: Tuple[str, ...]) -> str:
    return "[" + ", ".join(choices) + "]"


def _check_dog_id(dog_id: int, message: Optional[str] = None) -> None:
    """Reject ids no row can have before they reach SQLite."""
    if dog_id < 1 or dog_id > SQLITE_MAX_INTEGER:
        raise DogNotFoundError(dog_id, message)


def _to_db(value: Any) -> Any:
    """Convert a Python value to what is stored in SQLite."""
    if isinstance(value, date):
        return value.isoformat()
    return value


def build_update_statement(dog_id: int, changes: Dict[str, Any]) -> Tuple[str, tuple]:
    """Translate a ``{column: value}`` patch into a parameterized UPDATE.

    Raises ``ValueError`` for an empty patch or an unknown column.
    """
    if not changes:
        raise ValueError("Empty patch")
    unknown = set(changes) - set(WRITABLE_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown columns: {sorted(unknown)}")
    # Iterate over the whitelist so the statement text never depends on
    # caller supplied keys.
    columns = [column for column in WRITABLE_COLUMNS if column in changes]
    assignments = ", ".join(f"{column} = ?" for column in columns)
    params = tuple(_to_db(changes[column]) for column in columns) + (dog_id,)
    return f"UPDATE dogs SET {assignments} WHERE id = ?", params


class DogService:
    """Service class for managing the dog roster."""

    def __init__(self, database: Database) -> None:
        self.database = database

    @contextmanager
    def _cursor(self, action: str) -> Iterator[sqlite3.Cursor]:
        """Open a cursor and classify anything that escapes it.

        ``DogError`` subclasses pass through untouched, SQLite errors and
        unexpected exceptions become ``DogServiceError``.
        """
        try:
            with self.database.get_cursor() as cursor:
                yield cursor
        except DogError:
            raise
        except sqlite3.Error as exc:
            logger.error("Database error while %s: %s", action, exc)
            raise DogServiceError(f"Error while {action}: {exc}") from exc
        except Exception as exc:
            logger.exception("Unexpected error while %s", action)
            raise DogServiceError(f"Unexpected error: {exc}") from exc

    async def list_dogs(self, filter: Optional[str] = None) -> List[DogRead]:
        """Return active dogs, optionally filtered by a search term.

        A non-blank ``filter`` is trimmed and matched as a substring
        against ``name``, ``breed`` and ``supplier``.
        """
        query = "SELECT * FROM dogs WHERE date_deleted IS NULL"
        params: list = []
        term = filter.strip() if filter else ""
        if term:
            query += " AND (name LIKE ? OR breed LIKE ? OR supplier LIKE ?)"
            pattern = f"%{term}%"
            params.extend([pattern, pattern, pattern])
        with self._cursor("retrieving all dogs") as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
            return [self._row_to_dog_read(row) for row in rows]

    async def list_all_dogs(self) -> List[DogRead]:
        """Return every dog, including soft-deleted ones."""
        with self._cursor("retrieving all dogs") as cursor:
            rows = cursor.execute("SELECT * FROM dogs").fetchall()
            return [self._row_to_dog_read(row) for row in rows]

    async def get_dog(self, dog_id: int) -> DogRead:
        """Retrieve a dog by id, active or deleted.

        Raises ``DogNotFoundError`` if no such row exists.
        """
        _check_dog_id(dog_id)
        with self._cursor(f"retrieving dog with ID {dog_id}") as cursor:
            return self._fetch(cursor, dog_id)

    async def create_dog(self, draft: DogCreate) -> DogRead:
        """Validate a draft, insert it and return the stored record.

        Validation stops at the first violated rule.  The returned
        record is read back from the database by its generated id.
        """
        values = self._validate_draft(draft)
        with self._cursor("saving new record") as cursor:
            count = cursor.execute(
                "SELECT COUNT(*) FROM dogs WHERE badge_id = ?",
                (values["badge_id"],),
            ).fetchone()[0]
            if count > 0:
                raise DogValidationError(DUPLICATE_BADGE_MESSAGE)

            leaving_date = values["leaving_date"]
            date_acquired = values["date_acquired"]
            if leaving_date and date_acquired and leaving_date < date_acquired:
                raise DogValidationError("Leaving date cannot be before the acquisition date.")

            columns = ", ".join(WRITABLE_COLUMNS)
            placeholders = ", ".join("?" for _ in WRITABLE_COLUMNS)
            try:
                cursor.execute(
                    f"INSERT INTO dogs ({columns}) VALUES ({placeholders})",
                    tuple(_to_db(values[column]) for column in WRITABLE_COLUMNS),
                )
            except sqlite3.IntegrityError as exc:
                # UNIQUE(badge_id) caught a concurrent insert.
                raise DogValidationError(DUPLICATE_BADGE_MESSAGE) from exc
            if cursor.rowcount == 0:
                raise DogServiceError("Creating dog failed, no record added.")
            dog_id = cursor.lastrowid
            if not dog_id:
                raise DogServiceError("Creating dog failed, no ID obtained.")
            logger.info("Created dog %s (badge %s)", dog_id, values["badge_id"])
            try:
                return self._fetch(cursor, dog_id)
            except DogNotFoundError as exc:
                raise DogServiceError(f"Creating dog failed, record {dog_id} could not be read back.") from exc

    async def update_dog(self, dog_id: int, patch: DogUpdate) -> DogRead:
        """Apply the provided fields of ``patch`` to an existing dog.

        Omitted fields keep their stored values.  Both date rules
        (leaving vs. acquired, birth vs. acquired) are checked against
        the merged values.
        """
        _check_dog_id(dog_id)
        with self._cursor(f"updating dog with ID {dog_id}") as cursor:
            existing = self._fetch(cursor, dog_id)
            changes = self._validate_patch(patch)

            birth_date = changes.get("birth_date", existing.birth_date)
            leaving_date = changes.get("leaving_date", existing.leaving_date)
            date_acquired = changes.get("date_acquired", existing.date_acquired)
            if leaving_date and date_acquired and leaving_date < date_acquired:
                raise DogValidationError("Leaving date cannot be before the acquisition date.")
            if birth_date and date_acquired and birth_date > date_acquired:
                raise DogValidationError("Birth date cannot be after the acquisition date.")

            sql, params = build_update_statement(dog_id, changes)
            try:
                cursor.execute(sql, params)
            except sqlite3.IntegrityError as exc:
                raise DogValidationError(DUPLICATE_BADGE_MESSAGE) from exc
            if cursor.rowcount == 0:
                raise DogNotFoundError(dog_id, f"Dog with ID {dog_id} not found for update")
            logger.info("Updated dog %s: %s", dog_id, sorted(changes))
            return self._fetch(cursor, dog_id)

    async def soft_delete_dog(self, dog_id: int) -> None:
        """Mark a dog as deleted by stamping today's date.

        Deleting an already deleted dog succeeds and refreshes the date.
        """
        _check_dog_id(dog_id, f"Dog with ID {dog_id} not found for deletion")
        with self._cursor(f"marking dog with ID {dog_id} as deleted") as cursor:
            cursor.execute(
                "UPDATE dogs SET date_deleted = ? WHERE id = ?",
                (date.today().isoformat(), dog_id),
            )
            if cursor.rowcount == 0:
                raise DogNotFoundError(dog_id, f"Dog with ID {dog_id} not found for deletion")
        logger.info("Soft-deleted dog %s", dog_id)

    def _validate_draft(self, draft: DogCreate) -> Dict[str, Any]:
        """Check a new record and fill in defaults, in rule order."""
        if draft.name is None or not draft.name.strip():
            raise DogValidationError("Dog name is required.")
        if draft.breed is None or not draft.breed.strip():
            raise DogValidationError("Dog breed is required.")
        if draft.status is None or not draft.status.strip():
            raise DogValidationError("Dog status is required.")
        if draft.status.lower() not in STATUSES:
            raise DogValidationError(
                f"Dog status must be one of the following: {_format_choices(STATUSES)}"
            )
        if draft.leaving_reason is not None and draft.leaving_reason.lower() not in LEAVING_REASONS:
            raise DogValidationError(
                "If provided, the leaving reason must be one of the following: "
                f"{_format_choices(LEAVING_REASONS)}"
            )
        if draft.badge_id is None:
            raise DogValidationError("Dog badge ID is required.")
        if draft.badge_id <= 0:
            raise DogValidationError("Dog badge ID must be a positive number.")
        if draft.badge_id > SQLITE_MAX_INTEGER:
            raise DogValidationError(f"Dog badge ID cannot be greater than {SQLITE_MAX_INTEGER}.")

        return {
            "name": draft.name,
            "breed": draft.breed,
            "supplier": draft.supplier if draft.supplier is not None else "",
            "badge_id": draft.badge_id,
            "gender": draft.gender if draft.gender is not None else "",
            "birth_date": draft.birth_date,
            "date_acquired": draft.date_acquired,
            "status": draft.status,
            "leaving_date": draft.leaving_date,
            "leaving_reason": draft.leaving_reason if draft.leaving_reason is not None else "",
            "kenneling_characteristics": (
                draft.kenneling_characteristics if draft.kenneling_characteristics is not None else ""
            ),
        }

    def _validate_patch(self, patch: DogUpdate) -> Dict[str, Any]:
        """Check each provided field on its own and return the changes."""
        changes = patch.provided_fields()

        if "name" in changes and not changes["name"].strip():
            raise DogValidationError("Name cannot be empty if provided.")
        if "breed" in changes and not changes["breed"].strip():
            raise DogValidationError("Breed cannot be empty if provided.")
        if "badge_id" in changes and changes["badge_id"] <= 0:
            raise DogValidationError("Badge ID must be a positive number if provided.")
        if "badge_id" in changes and changes["badge_id"] > SQLITE_MAX_INTEGER:
            raise DogValidationError(f"Badge ID cannot be greater than {SQLITE_MAX_INTEGER}.")
        if "status" in changes:
            if not changes["status"].strip():
                raise DogValidationError("Status cannot be empty if provided.")
            if changes["status"].lower() not in STATUSES:
                raise DogValidationError(
                    f"Status must be one of the following: {_format_choices(STATUSES)}"
                )
        if "leaving_reason" in changes:
            if not changes["leaving_reason"].strip():
                raise DogValidationError("Leaving Reason cannot be empty if provided.")
            if changes["leaving_reason"].lower() not in LEAVING_REASONS:
                raise DogValidationError(
                    f"Leaving reason must be one of the following: {_format_choices(LEAVING_REASONS)}"
                )

        if not changes:
            raise DogValidationError("No update values have been provided.")
        return changes

    def _fetch(self, cursor: sqlite3.Cursor, dog_id: int) -> DogRead:
        row = cursor.execute("SELECT * FROM dogs WHERE id = ?", (dog_id,)).fetchone()
        if not row:
            raise DogNotFoundError(dog_id)
        return self._row_to_dog_read(row)

    @staticmethod
    def _row_to_dog_read(row: sqlite3.Row) -> DogRead:
        """Convert a database row to a DogRead schema instance."""
        return DogRead.model_validate(dict(row))
