"""Abstract database adapter interface.

An adapter owns the connection pool for one target database. Callers borrow a
``Connection`` for the span of a single transaction through
``DatabaseAdapter.connection()``, which always hands it back, whatever happens
inside the block.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .types import Row


class Connection(ABC):
    """One borrowed database connection.

    Queries passed to ``execute`` and ``fetchall`` use ``?`` placeholders
    regardless of backend. ``execute_script`` runs an opaque statement batch
    without parameters.
    """

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction.

        Raises:
            DatabaseError: If the transaction cannot be started
        """
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit current transaction.

        Raises:
            DatabaseError: If commit fails
        """
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Rollback current transaction.

        Raises:
            DatabaseError: If rollback fails
        """
        pass

    @abstractmethod
    def execute(self, query: str, params: tuple | None = None) -> Any:
        """Execute a single query and return the cursor.

        Args:
            query: SQL query with ``?`` placeholders
            params: Query parameters (optional)

        Returns:
            Database cursor

        Raises:
            DatabaseError: If execution fails
            IntegrityError: If integrity constraint violated
        """
        pass

    @abstractmethod
    def execute_script(self, script: str) -> None:
        """Execute a batch of statements inside the current transaction.

        Args:
            script: Statement batch in the backend's native dialect

        Raises:
            DatabaseError: With the driver's message, if any statement fails
        """
        pass

    def fetchall(self, query: str, params: tuple | None = None) -> list[Row]:
        """Execute query and fetch all results as list of dictionaries."""
        return [dict(row) for row in self.execute(query, params).fetchall()]


class DatabaseAdapter(ABC):
    """Abstract database adapter.

    Usage:
        >>> with create_database(config) as adapter:
        ...     with adapter.connection() as conn:
        ...         conn.fetchall('SELECT * FROM "Migration"')
    """

    @abstractmethod
    def open(self) -> None:
        """Prepare the adapter for handing out connections.

        Raises:
            ConnectionError: If the pool cannot be created
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release every resource held by the adapter."""
        pass

    @abstractmethod
    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Borrow a connection for the duration of the block.

        Raises:
            ConnectionError: If no connection can be acquired
        """
        pass

    @abstractmethod
    def get_tables(self) -> list[str]:
        """Get list of all tables in database.

        Raises:
            DatabaseError: If query fails
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
