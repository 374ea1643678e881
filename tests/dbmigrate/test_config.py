"""Tests for startup configuration."""

from pathlib import Path

import pytest

from dbmigrate.config import MigratorConfig
from dbmigrate.db import DatabaseType


class TestMigratorConfig:
    """Tests for MigratorConfig.from_env."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "postgresql://app@localhost/app")
        monkeypatch.setenv("MIGRATIONS_DIR", "db/migrations")
        monkeypatch.setenv("DB_POOL_SIZE", "2")

        config = MigratorConfig.from_env()

        assert config.migrations_dir == Path("db/migrations")
        assert config.database.db_type == DatabaseType.POSTGRESQL
        assert config.database.pool_size == 2
        assert config.require_database() is config.database

    def test_without_db_url(self, monkeypatch):
        monkeypatch.delenv("DB_URL", raising=False)

        config = MigratorConfig.from_env()

        assert config.database is None
        with pytest.raises(ValueError, match="DB_URL is not set"):
            config.require_database()

    def test_unsupported_db_url(self, monkeypatch):
        monkeypatch.setenv("DB_URL", "oracle://localhost/app")

        with pytest.raises(ValueError):
            MigratorConfig.from_env()
