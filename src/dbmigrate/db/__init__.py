"""Database access layer for dbmigrate.

Adapters own the connection pool for the target database and lend out one
connection per transaction.

Example:
    >>> from dbmigrate.db import DatabaseConfig, create_database
    >>>
    >>> config = DatabaseConfig(url="sqlite:///data/app.db")
    >>> with create_database(config) as adapter:
    ...     with adapter.connection() as conn:
    ...         conn.begin()
    ...         conn.execute_script("CREATE TABLE t (id INTEGER);")
    ...         conn.commit()
"""

from .factory import DatabaseConfig, create_database
from .interface import Connection, DatabaseAdapter
from .types import (
    ConnectionError,
    DatabaseError,
    DatabaseType,
    IntegrityError,
    Row,
    SchemaError,
)

__all__ = [
    # Factory
    "DatabaseConfig",
    "create_database",
    # Interface
    "Connection",
    "DatabaseAdapter",
    # Types and exceptions
    "DatabaseType",
    "DatabaseError",
    "ConnectionError",
    "IntegrityError",
    "SchemaError",
    "Row",
]
