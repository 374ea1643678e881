"""PostgreSQL database adapter implementation.

This adapter wraps psycopg3 and psycopg_pool. Pooled connections run in
autocommit mode and transactions are opened with an explicit ``BEGIN``, so a
migration script and its bookkeeping row commit or roll back together.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

try:
    import psycopg
    from psycopg.rows import dict_row
    from psycopg_pool import ConnectionPool, PoolTimeout
except ImportError as e:
    raise ImportError(
        "PostgreSQL dependencies not installed. "
        'Install with: pip install -e ".[test]" or pip install psycopg[binary] psycopg-pool'
    ) from e

from .interface import Connection, DatabaseAdapter
from .types import ConnectionError as DBConnectionError
from .types import DatabaseError
from .types import IntegrityError as DBIntegrityError


class PostgreSQLConnection(Connection):
    """Wrapper around one pooled psycopg connection."""

    def __init__(self, conn: "psycopg.Connection"):
        self._conn = conn

    def begin(self) -> None:
        try:
            self._conn.execute("BEGIN")
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to begin transaction: {e}") from e

    def commit(self) -> None:
        try:
            self._conn.commit()
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to commit transaction: {e}") from e

    def rollback(self) -> None:
        try:
            self._conn.rollback()
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to rollback transaction: {e}") from e

    def execute(self, query: str, params: tuple | None = None) -> Any:
        """Execute a query and return cursor.

        Note: PostgreSQL uses %s placeholders, but this method expects queries
        with ? placeholders (SQLite style) and converts them automatically.
        """
        try:
            pg_query = query.replace("?", "%s")

            cursor = self._conn.cursor()
            if params:
                cursor.execute(pg_query, params)
            else:
                cursor.execute(pg_query)
            return cursor
        except psycopg.errors.IntegrityError as e:
            raise DBIntegrityError(str(e)) from e
        except psycopg.Error as e:
            raise DatabaseError(str(e)) from e

    def execute_script(self, script: str) -> None:
        # Without parameters psycopg sends the text as one simple query, so a
        # multi-statement batch is accepted verbatim.
        try:
            self._conn.execute(script)
        except psycopg.Error as e:
            raise DatabaseError(str(e)) from e


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter.

    Owns a ``ConnectionPool`` created in ``open()`` and closed in ``close()``.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 1,
        pool_max_overflow: int = 4,
        pool_timeout: float = 30.0,
    ):
        """Initialize PostgreSQL adapter.

        Args:
            url: libpq connection string or postgresql:// URL
            pool_size: Minimum number of connections in pool
            pool_max_overflow: Maximum overflow connections beyond pool_size
            pool_timeout: Seconds to wait for a connection before failing
        """
        self.url = url
        self.pool_size = pool_size
        self.pool_max_overflow = pool_max_overflow
        self.pool_timeout = pool_timeout

        self._pool: ConnectionPool | None = None

    def open(self) -> None:
        """Create the connection pool and wait for its first connections."""
        try:
            self._pool = ConnectionPool(
                self.url,
                min_size=self.pool_size,
                max_size=self.pool_size + self.pool_max_overflow,
                timeout=self.pool_timeout,
                kwargs={"autocommit": True, "row_factory": dict_row},
                open=False,
            )
            self._pool.open(wait=True, timeout=self.pool_timeout)
        except (PoolTimeout, psycopg.Error) as e:
            self._pool = None
            raise DBConnectionError(f"Failed to connect to PostgreSQL database: {e}") from e

    def close(self) -> None:
        """Close the connection pool."""
        if self._pool:
            self._pool.close()
            self._pool = None

    @contextmanager
    def connection(self) -> Iterator[PostgreSQLConnection]:
        """Borrow a pooled connection; it goes back to the pool on every exit path."""
        if not self._pool:
            raise DBConnectionError("Connection pool is not open")

        try:
            raw = self._pool.getconn()
        except PoolTimeout as e:
            raise DBConnectionError(f"Failed to acquire connection: {e}") from e

        try:
            yield PostgreSQLConnection(raw)
        finally:
            # The pool rolls back any transaction still open on return
            self._pool.putconn(raw)

    def get_tables(self) -> list[str]:
        """Get list of all tables in the current schema."""
        query = """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = current_schema()
            AND table_type = 'BASE TABLE'
            ORDER BY table_name
        """
        with self.connection() as conn:
            return [row["table_name"] for row in conn.fetchall(query)]

    def __repr__(self) -> str:
        """String representation."""
        status = "open" if self._pool else "closed"
        return f"PostgreSQLAdapter(pool_size={self.pool_size}, status={status})"
