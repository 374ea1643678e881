"""SQLite database adapter implementation.

SQLite has transactional DDL, so a migration's statements and its bookkeeping
row can share one transaction. ``sqlite3.executescript`` would commit any open
transaction first, so statement batches are split and run one by one instead.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from common.logger import get_logger

from .interface import Connection, DatabaseAdapter
from .types import ConnectionError as DBConnectionError
from .types import DatabaseError
from .types import IntegrityError as DBIntegrityError

logger = get_logger(__name__)


def split_statements(script: str) -> list[str]:
    """Split a statement batch into individually executable statements.

    A ``;`` only ends a statement when ``sqlite3.complete_statement`` agrees,
    so semicolons inside string literals, comments and trigger bodies are
    left alone.

    Args:
        script: SQL text holding zero or more statements

    Returns:
        Statements in order, stripped, without empty entries
    """
    statements = []
    buffer = ""
    for char in script:
        buffer += char
        if char == ";" and sqlite3.complete_statement(buffer):
            statements.append(buffer.strip())
            buffer = ""

    if buffer.strip():
        statements.append(buffer.strip())

    return [s for s in statements if s != ";"]


class SQLiteConnection(Connection):
    """Connection wrapper running in explicit-transaction mode."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    @property
    def in_transaction(self) -> bool:
        return self._conn.in_transaction

    def begin(self) -> None:
        try:
            self._conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to begin transaction: {e}") from e

    def commit(self) -> None:
        try:
            self._conn.commit()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to commit transaction: {e}") from e

    def rollback(self) -> None:
        try:
            self._conn.rollback()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to rollback transaction: {e}") from e

    def execute(self, query: str, params: tuple | None = None) -> Any:
        try:
            cursor = self._conn.cursor()
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            return cursor
        except sqlite3.IntegrityError as e:
            raise DBIntegrityError(str(e)) from e
        except sqlite3.Error as e:
            raise DatabaseError(str(e)) from e

    def execute_script(self, script: str) -> None:
        cursor = self._conn.cursor()
        for statement in split_statements(script):
            try:
                cursor.execute(statement)
            except sqlite3.Error as e:
                raise DatabaseError(str(e)) from e


class SQLiteAdapter(DatabaseAdapter):
    """SQLite database adapter.

    Holds a single connection, opened with ``isolation_level=None`` so that
    transactions start only on an explicit ``BEGIN``. Borrowing it is
    exclusive by construction since the runner is single threaded.
    """

    def __init__(self, db_path: str | Path):
        """Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file, or ``:memory:``
        """
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def open(self) -> None:
        """Open the underlying connection."""
        try:
            if str(self.db_path) != ":memory:":
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self._conn = sqlite3.connect(str(self.db_path), isolation_level=None)
            self._conn.row_factory = sqlite3.Row
        except (sqlite3.Error, OSError) as e:
            raise DBConnectionError(f"Failed to connect to SQLite database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    @contextmanager
    def connection(self) -> Iterator[SQLiteConnection]:
        """Borrow the adapter's connection.

        A transaction still open when the block exits is rolled back, so the
        next borrower always starts clean.
        """
        if not self._conn:
            raise DBConnectionError("No active connection")

        conn = SQLiteConnection(self._conn)
        try:
            yield conn
        finally:
            if conn.in_transaction:
                logger.debug("Rolling back transaction left open on release")
                self._conn.rollback()

    def get_tables(self) -> list[str]:
        """Get list of all tables in database."""
        with self.connection() as conn:
            rows = conn.fetchall("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        # sqlite_sequence is maintained by SQLite itself
        return [row["name"] for row in rows if row["name"] != "sqlite_sequence"]

    def __repr__(self) -> str:
        """String representation."""
        status = "open" if self._conn else "closed"
        return f"SQLiteAdapter(db_path={self.db_path}, status={status})"
