"""Environment configuration interface for dbmigrate.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def db_url() -> str | None:
        """Get the target database connection string.

        Returns:
            Connection string (postgresql://... or sqlite:///...), or None if unset
        """
        return os.getenv("DB_URL")

    @staticmethod
    def migrations_dir() -> Path:
        """Get the directory holding migration units.

        Returns:
            Path to the migrations root, defaults to ./migration
        """
        return Path(os.getenv("MIGRATIONS_DIR", "./migration"))

    @staticmethod
    def db_pool_size() -> int:
        """Get minimum number of pooled connections.

        Returns:
            Pool size, defaults to 1
        """
        return int(os.getenv("DB_POOL_SIZE", "1"))

    @staticmethod
    def db_pool_max_overflow() -> int:
        """Get number of connections allowed beyond the pool size.

        Returns:
            Max overflow, defaults to 4
        """
        return int(os.getenv("DB_POOL_MAX_OVERFLOW", "4"))

    @staticmethod
    def db_pool_timeout() -> float:
        """Get seconds to wait for a pooled connection.

        Returns:
            Timeout in seconds, defaults to 30
        """
        return float(os.getenv("DB_POOL_TIMEOUT", "30"))

    @staticmethod
    def log_level() -> str:
        """Get the logging level.

        Returns:
            Upper-cased level name, defaults to INFO
        """
        return os.getenv("LOG_LEVEL", "INFO").upper()


# Singleton instance for convenient access
env = Environment()
