"""Exceptions raised by the migration components."""


class MigrationError(Exception):
    """Base exception for migration operations."""

    pass


class DiscoveryError(MigrationError):
    """The migrations root cannot be read."""

    pass


class CreateError(MigrationError):
    """A new migration unit cannot be scaffolded."""

    pass


class ScriptExecutionError(MigrationError):
    """An up or down script failed against the database.

    The message is the driver's own message.
    """

    pass


class BookkeepingError(MigrationError):
    """Recording or removing an applied migration failed."""

    pass
