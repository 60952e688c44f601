"""Database connection management for the local SQLite task board.

A process-wide connection manager that opens the database file once, turns
on WAL mode and foreign key enforcement, and applies pending migrations.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from homeboard_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from homeboard_cli.exceptions import StorageError
from homeboard_cli.utils.logger import get_logger

logger = get_logger("adapters.sqlite.connection")

DEFAULT_DB_NAME = "homeboard.db"


def default_db_path() -> Path:
    """Location of the database when the config does not override it."""
    return Path(user_data_dir("homeboard-cli")) / DEFAULT_DB_NAME


class DatabaseConnection:
    """Singleton connection manager for the local SQLite database."""

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _schema_version: int | None = None

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection with row factory, WAL and foreign keys set up

        Raises:
            StorageError: If the database cannot be opened or migrated
        """
        instance = cls()

        db_path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        try:
            connection = sqlite3.connect(
                str(db_path),
                check_same_thread=False,
                timeout=30.0,
            )
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA foreign_keys = ON")
            connection.execute("PRAGMA journal_mode = WAL")
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {db_path}: {e}") from e

        if is_new_database:
            os.chmod(db_path, 0o600)
            logger.info("created database %s", db_path)

        try:
            runner = MigrationRunner(connection)
            runner.upgrade(ALL_MIGRATIONS)
            schema_version = runner.schema_version
        except sqlite3.Error as e:
            connection.close()
            raise StorageError(f"Cannot prepare database {db_path}: {e}") from e
        except StorageError:
            connection.close()
            raise

        logger.debug("opened %s at schema version %d", db_path, schema_version)
        instance._connection = connection
        instance._db_path = db_path
        instance._schema_version = schema_version

        atexit.register(cls.close_connection)

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.commit()
                instance._connection.close()
            except sqlite3.Error as e:
                logger.warning("error closing database: %s", e)
            finally:
                instance._connection = None
                instance._db_path = None
                instance._schema_version = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        return cls()._db_path

    @classmethod
    def get_schema_version(cls) -> int | None:
        """Schema version of the open database, None when nothing is open."""
        return cls()._schema_version


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
