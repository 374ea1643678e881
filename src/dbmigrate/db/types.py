"""Shared types and exceptions for the database access layer."""

from enum import Enum
from typing import Any


class DatabaseType(str, Enum):
    """Supported database types, keyed by connection string scheme."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class ConnectionError(DatabaseError):
    """Error acquiring a database connection."""

    pass


class IntegrityError(DatabaseError):
    """Database integrity constraint violation."""

    pass


class SchemaError(DatabaseError):
    """Error creating or inspecting the bookkeeping schema."""

    pass


# Type alias for database rows
Row = dict[str, Any]
