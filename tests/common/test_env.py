"""Tests for environment configuration interface."""

from pathlib import Path

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_db_url_unset(self, monkeypatch):
        """Test db_url returns None when DB_URL is unset."""
        monkeypatch.delenv("DB_URL", raising=False)
        assert Environment.db_url() is None

    def test_db_url_from_env(self, monkeypatch):
        """Test db_url reads from environment."""
        monkeypatch.setenv("DB_URL", "postgresql://app@localhost/app")
        assert Environment.db_url() == "postgresql://app@localhost/app"

    def test_migrations_dir_default(self, monkeypatch):
        """Test migrations_dir returns default value."""
        monkeypatch.delenv("MIGRATIONS_DIR", raising=False)
        assert Environment.migrations_dir() == Path("migration")

    def test_migrations_dir_from_env(self, monkeypatch):
        """Test migrations_dir reads from environment."""
        monkeypatch.setenv("MIGRATIONS_DIR", "/srv/app/migrations")
        assert Environment.migrations_dir() == Path("/srv/app/migrations")

    def test_db_pool_size_default(self, monkeypatch):
        """Test db_pool_size returns default value."""
        monkeypatch.delenv("DB_POOL_SIZE", raising=False)
        assert Environment.db_pool_size() == 1

    def test_db_pool_size_from_env(self, monkeypatch):
        """Test db_pool_size reads from environment."""
        monkeypatch.setenv("DB_POOL_SIZE", "3")
        assert Environment.db_pool_size() == 3

    def test_db_pool_max_overflow_default(self, monkeypatch):
        """Test db_pool_max_overflow returns default value."""
        monkeypatch.delenv("DB_POOL_MAX_OVERFLOW", raising=False)
        assert Environment.db_pool_max_overflow() == 4

    def test_db_pool_timeout_from_env(self, monkeypatch):
        """Test db_pool_timeout parses a float."""
        monkeypatch.setenv("DB_POOL_TIMEOUT", "2.5")
        assert Environment.db_pool_timeout() == 2.5

    def test_log_level_is_upper_cased(self, monkeypatch):
        """Test log_level normalizes case."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Environment.log_level() == "DEBUG"


class TestEnvSingleton:
    """Tests for env singleton instance."""

    def test_env_is_environment_instance(self):
        """Test that env is an instance of Environment."""
        assert isinstance(env, Environment)

    def test_env_singleton_methods_work(self, monkeypatch):
        """Test that env singleton methods work."""
        monkeypatch.setenv("DB_URL", "sqlite:///data/app.db")
        assert env.db_url() == "sqlite:///data/app.db"
