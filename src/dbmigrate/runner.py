"""Migration runner: applies pending units and reverts applied ones."""

from functools import partial

from rich.markup import escape

from common.logger import get_logger

from .catalog import MigrationCatalog, MigrationUnit
from .db import DatabaseAdapter
from .executor import TransactionalExecutor
from .store import AppliedRecord, MigrationStore

logger = get_logger(__name__)


class MigrationRunner:
    """Orchestrates catalog, store and executor.

    Usage:
        with create_database(config.database) as adapter:
            runner = MigrationRunner(adapter, MigrationCatalog(config.migrations_dir))
            runner.migrate()
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        catalog: MigrationCatalog,
        store: MigrationStore | None = None,
        executor: TransactionalExecutor | None = None,
    ):
        """Initialize migration runner.

        Args:
            adapter: Open database adapter for the target database
            catalog: Source of migration units
            store: Bookkeeping store (defaults to one on ``adapter``)
            executor: Transactional executor (defaults to one on ``adapter``)
        """
        self.adapter = adapter
        self.catalog = catalog
        self.store = store or MigrationStore(adapter)
        self.executor = executor or TransactionalExecutor(adapter)

    def pending(self) -> list[MigrationUnit]:
        """Units not yet applied, ascending by key."""
        units = self.catalog.list()
        applied = self.store.list_applied_keys()
        return [unit for unit in units if unit.key not in applied]

    def applied(self) -> list[MigrationUnit]:
        """Applied units, most recently created first."""
        units = self.catalog.list()
        applied = self.store.list_applied_keys()
        return [unit for unit in reversed(units) if unit.key in applied]

    def migrate(self) -> list[MigrationUnit]:
        """Apply every pending migration in ascending key order.

        A unit whose up-script is empty is skipped without being recorded, so
        it stays pending. The first failure propagates; units committed before
        it stay applied.

        Returns:
            Units applied by this call
        """
        self.store.ensure_schema()

        pending = self.pending()
        if not pending:
            logger.info("No pending migrations")
            return []

        logger.debug(f"Found {len(pending)} pending migration(s)")

        migrated = []
        for unit in pending:
            if not unit.up_script:
                logger.debug(f"Skipping {escape(unit.identifier)}: empty up script")
                continue

            self.executor.run(
                unit.up_script,
                partial(self.store.record_applied, key=unit.key, name=unit.name),
            )
            logger.info(f"[green]MIGRATED {unit.key}[/green] [blue]{escape(unit.name)}[/blue]")
            migrated.append(unit)

        return migrated

    def rollback(self, revert_all: bool = False) -> list[MigrationUnit]:
        """Revert the most recent applied migration, or all of them.

        Units are walked newest key first. A unit whose down-script is empty
        is skipped and does not count as reverted, so without ``revert_all``
        the walk carries on to the next older unit.

        Args:
            revert_all: Revert every applied migration instead of one

        Returns:
            Units reverted by this call, in the order they were reverted
        """
        self.store.ensure_schema()

        reverted = []
        for unit in self.applied():
            if not revert_all and reverted:
                break

            if not unit.down_script:
                logger.debug(f"Skipping {escape(unit.identifier)}: empty down script")
                continue

            self.executor.run(
                unit.down_script,
                partial(self.store.remove_applied, key=unit.key),
            )
            logger.info(f"[green]REVERTED {unit.key}[/green] [blue]{escape(unit.name)}[/blue]")
            reverted.append(unit)

        if not reverted:
            logger.info("Nothing to roll back")

        return reverted

    def status(self) -> list[tuple[MigrationUnit, bool]]:
        """Every catalog unit paired with whether it is applied, ascending.

        Read-only: a database without the bookkeeping table reports every
        unit as pending.
        """
        units = self.catalog.list()
        applied = {record.key for record in self._applied_records()}
        return [(unit, unit.key in applied) for unit in units]

    def missing(self) -> list[AppliedRecord]:
        """Applied records whose unit is no longer in the catalog."""
        known = {unit.key for unit in self.catalog.list()}
        return [record for record in self._applied_records() if record.key not in known]

    def _applied_records(self) -> list[AppliedRecord]:
        if not self.store.has_schema():
            return []
        return self.store.list_applied()
