"""Versioned SQL migrations with transactional bookkeeping.

Migration units live on disk as ``{key}-{name}/up.sql`` and ``down.sql``.
Applied units are recorded in a ``"Migration"`` table inside the target
database, in the same transaction as the script that applied them.
"""

from .catalog import MigrationCatalog, MigrationUnit
from .config import MigratorConfig
from .errors import (
    BookkeepingError,
    CreateError,
    DiscoveryError,
    MigrationError,
    ScriptExecutionError,
)
from .executor import TransactionalExecutor
from .runner import MigrationRunner
from .store import AppliedRecord, MigrationStore

__all__ = [
    "AppliedRecord",
    "BookkeepingError",
    "CreateError",
    "DiscoveryError",
    "MigrationCatalog",
    "MigrationError",
    "MigrationRunner",
    "MigrationStore",
    "MigratorConfig",
    "MigrationUnit",
    "ScriptExecutionError",
    "TransactionalExecutor",
]
