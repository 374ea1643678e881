"""Shared pytest fixtures for dbmigrate."""

from pathlib import Path

import pytest

from dbmigrate.db import DatabaseConfig, create_database


@pytest.fixture
def db_url(tmp_path):
    """SQLite connection string for a fresh database file."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def adapter(db_url):
    """Open SQLite adapter, closed after the test."""
    with create_database(DatabaseConfig(url=db_url)) as adapter:
        yield adapter


@pytest.fixture
def migrations_dir(tmp_path):
    """Empty migrations root."""
    root = tmp_path / "migration"
    root.mkdir()
    return root


@pytest.fixture
def make_unit(migrations_dir):
    """Write a migration unit directory and return its path.

    ``up``/``down`` set to None leave the script file out entirely.
    """

    def _make_unit(key: int, name: str, up: str | None = "", down: str | None = "") -> Path:
        path = migrations_dir / f"{key}-{name}"
        path.mkdir()
        if up is not None:
            (path / "up.sql").write_text(up, encoding="utf-8")
        if down is not None:
            (path / "down.sql").write_text(down, encoding="utf-8")
        return path

    return _make_unit
