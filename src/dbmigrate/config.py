"""Startup configuration for the migration runner."""

from dataclasses import dataclass
from pathlib import Path

from common.env import env
from dbmigrate.db import DatabaseConfig


@dataclass
class MigratorConfig:
    """Everything the runner needs, read once at startup.

    Attributes:
        database: Target database settings, None when DB_URL is unset
        migrations_dir: Root directory of the migration catalog
    """

    database: DatabaseConfig | None
    migrations_dir: Path

    @classmethod
    def from_env(cls) -> "MigratorConfig":
        """Build configuration from the process environment (and .env).

        Raises:
            ValueError: If DB_URL is set but unsupported
        """
        url = env.db_url()
        database = None
        if url:
            database = DatabaseConfig(
                url=url,
                pool_size=env.db_pool_size(),
                pool_max_overflow=env.db_pool_max_overflow(),
                pool_timeout=env.db_pool_timeout(),
            )

        return cls(database=database, migrations_dir=env.migrations_dir())

    def require_database(self) -> DatabaseConfig:
        """Get the database settings for commands that talk to the database.

        Raises:
            ValueError: If DB_URL is unset
        """
        if self.database is None:
            raise ValueError("DB_URL is not set")
        return self.database
