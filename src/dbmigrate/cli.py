#!/usr/bin/env python3
"""CLI for creating, applying and reverting migrations."""

import argparse
import sys

from rich.markup import escape

from common.logger import progress

from .catalog import MigrationCatalog
from .config import MigratorConfig
from .db import create_database
from .runner import MigrationRunner


def _runner(adapter, config: MigratorConfig) -> MigrationRunner:
    return MigrationRunner(adapter, MigrationCatalog(config.migrations_dir))


def cmd_create(args, config: MigratorConfig) -> None:
    """Scaffold a new migration with empty up/down scripts."""
    MigrationCatalog(config.migrations_dir).create_unit(args.name)


def cmd_migrate(args, config: MigratorConfig) -> None:
    """Apply every pending migration."""
    with create_database(config.require_database()) as adapter:
        _runner(adapter, config).migrate()


def cmd_rollback(args, config: MigratorConfig) -> None:
    """Revert the latest applied migration, or all of them with --all."""
    with create_database(config.require_database()) as adapter:
        _runner(adapter, config).rollback(revert_all=args.all)


def cmd_status(args, config: MigratorConfig) -> None:
    """Print every migration with its state, plus applied records missing on disk."""
    with create_database(config.require_database()) as adapter:
        runner = _runner(adapter, config)
        rows = runner.status()
        missing = runner.missing()

    if not rows and not missing:
        progress(f"No migrations in {escape(str(config.migrations_dir))}")
        return

    for unit, applied in rows:
        state = "[green]applied[/green]" if applied else "[yellow]pending[/yellow]"
        progress(f"{state}  {escape(unit.identifier)}")

    # Recorded in the database but no longer on disk
    for record in missing:
        progress(f"[red]missing[/red]  {record.key}-{escape(record.name)}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="dbmigrate",
        description="Apply and revert versioned SQL migrations",
        epilog=(
            "Environment:\n"
            "  DB_URL          postgresql://... or sqlite:///path/to.db\n"
            "  MIGRATIONS_DIR  migrations root (default: ./migration)\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="Create a new migration.")
    create_parser.add_argument("name", help="The name of the migration.")
    create_parser.set_defaults(func=cmd_create)

    migrate_parser = subparsers.add_parser("migrate", help="Run all of the available migrations.")
    migrate_parser.set_defaults(func=cmd_migrate)

    rollback_parser = subparsers.add_parser("rollback", help="Undo previous migrations executed.")
    rollback_parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Revert all migrations.",
    )
    rollback_parser.set_defaults(func=cmd_rollback)

    status_parser = subparsers.add_parser("status", help="Show applied and pending migrations.")
    status_parser.set_defaults(func=cmd_status)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the dbmigrate CLI.

    Failures while migrating are not caught: the process ends with the
    driver's error and a non-zero status. Success always exits with 0.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = MigratorConfig.from_env()
        if args.command != "create":
            config.require_database()
    except ValueError as e:
        parser.error(str(e))

    args.func(args, config)
    sys.exit(0)


if __name__ == "__main__":
    main()
