"""Bookkeeping table recording which migrations are applied.

The table lives in the target database itself:

    "Migration"(version BIGINT PRIMARY KEY, name VARCHAR(255))

``version`` holds the unit key. A row exists for a key exactly while that
unit's up-script is committed and not rolled back.
"""

from dataclasses import dataclass

from common.logger import get_logger

from .db import Connection, DatabaseAdapter, DatabaseError, SchemaError
from .db import ConnectionError as DBConnectionError
from .errors import BookkeepingError

logger = get_logger(__name__)

TABLE_NAME = "Migration"

CREATE_TABLE = f"""
    CREATE TABLE IF NOT EXISTS "{TABLE_NAME}"(
        version BIGINT PRIMARY KEY NOT NULL,
        name VARCHAR(255) NOT NULL
    )
"""


@dataclass(frozen=True)
class AppliedRecord:
    """One row of the bookkeeping table."""

    key: int
    name: str


class MigrationStore:
    """Reads and mutates the bookkeeping table."""

    def __init__(self, adapter: DatabaseAdapter):
        """Initialize store.

        Args:
            adapter: Open database adapter for the target database
        """
        self.adapter = adapter

    def ensure_schema(self) -> None:
        """Create the bookkeeping table if it doesn't exist.

        Raises:
            SchemaError: If the table cannot be created
        """
        try:
            with self.adapter.connection() as conn:
                conn.begin()
                conn.execute(CREATE_TABLE)
                conn.commit()
        except DBConnectionError:
            raise
        except DatabaseError as e:
            raise SchemaError(f"Failed to create {TABLE_NAME} table: {e}") from e

    def has_schema(self) -> bool:
        """Whether the bookkeeping table exists, without creating it."""
        return TABLE_NAME in self.adapter.get_tables()

    def list_applied(self) -> list[AppliedRecord]:
        """Get every applied record, ascending by key."""
        with self.adapter.connection() as conn:
            rows = conn.fetchall(f'SELECT version, name FROM "{TABLE_NAME}" ORDER BY version')
        return [AppliedRecord(key=int(row["version"]), name=row["name"]) for row in rows]

    def list_applied_keys(self) -> set[int]:
        """Get the keys of every applied migration."""
        with self.adapter.connection() as conn:
            rows = conn.fetchall(f'SELECT version FROM "{TABLE_NAME}"')
        return {int(row["version"]) for row in rows}

    def record_applied(self, conn: Connection, key: int, name: str) -> None:
        """Insert the record for ``key`` inside the caller's transaction.

        Args:
            conn: Connection with an open transaction; not committed here
            key: Migration unit key
            name: Migration unit name

        Raises:
            BookkeepingError: If the insert fails (e.g. key already recorded)
        """
        try:
            conn.execute(f'INSERT INTO "{TABLE_NAME}" (version, name) VALUES (?, ?)', (key, name))
        except DatabaseError as e:
            raise BookkeepingError(str(e)) from e
        logger.debug(f"Recorded migration {key} as applied")

    def remove_applied(self, conn: Connection, key: int) -> None:
        """Delete the record for ``key`` inside the caller's transaction.

        Raises:
            BookkeepingError: If the delete fails or matches no row
        """
        try:
            cursor = conn.execute(f'DELETE FROM "{TABLE_NAME}" WHERE version = ?', (key,))
        except DatabaseError as e:
            raise BookkeepingError(str(e)) from e

        if cursor.rowcount != 1:
            raise BookkeepingError(f"Migration {key} is not recorded as applied")
        logger.debug(f"Removed applied record for migration {key}")
