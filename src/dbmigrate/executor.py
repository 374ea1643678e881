"""Run one migration script and its bookkeeping change as a single transaction."""

from collections.abc import Callable

from rich.markup import escape

from common.logger import get_logger

from .db import Connection, DatabaseAdapter, DatabaseError
from .errors import ScriptExecutionError

logger = get_logger(__name__)

# Mutation of the bookkeeping table, run on the transaction's connection
Bookkeeping = Callable[[Connection], None]


class TransactionalExecutor:
    """Executes scripts atomically together with their bookkeeping mutation."""

    def __init__(self, adapter: DatabaseAdapter):
        """Initialize executor.

        Args:
            adapter: Open database adapter lending connections from its pool
        """
        self.adapter = adapter

    def run(self, script: str, bookkeeping: Bookkeeping) -> None:
        """Execute ``script`` then ``bookkeeping`` in one transaction and commit.

        On any failure the transaction is rolled back and the original error
        is re-raised. The connection goes back to the pool on every path.

        Args:
            script: Statement batch to execute
            bookkeeping: Callable inserting or deleting the applied record

        Raises:
            ConnectionError: If no connection can be acquired
            ScriptExecutionError: If the script fails (driver message kept)
            BookkeepingError: If the bookkeeping mutation fails
            DatabaseError: If the transaction cannot be started or committed
        """
        with self.adapter.connection() as conn:
            conn.begin()
            try:
                try:
                    conn.execute_script(script)
                except DatabaseError as e:
                    raise ScriptExecutionError(str(e)) from e

                bookkeeping(conn)
                conn.commit()
            except Exception:
                self._rollback(conn)
                raise

    def _rollback(self, conn: Connection) -> None:
        try:
            conn.rollback()
        except DatabaseError as e:
            # Caller still receives the original failure
            logger.error(f"Rollback failed: {escape(str(e))}")
