"""Database connection management for the local SQLite vault.

This module provides a singleton connection manager for the local SQLite database,
ensuring proper connection lifecycle, WAL mode, and foreign key enforcement.
"""

from __future__ import annotations

import atexit
import logging
import os
import sqlite3
import time
from pathlib import Path

from platformdirs import user_data_dir

from dailytodo_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Singleton connection manager for the local SQLite vault.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Automatic directory creation
    - Proper file permissions (owner read/write only)
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection configured for DailyTodo usage
        """
        instance = cls()

        if db_path is None:
            db_path = Path(user_data_dir("dailytodo_cli")) / "dailytodo.db"
        else:
            db_path = Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Close existing connection if path changed
        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            check_same_thread=False,  # The scheduler loop and commands share it
            timeout=30.0,  # Wait up to 30s for locks
        )

        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        # Owner read/write only
        if is_new_database:
            os.chmod(db_path, 0o600)
            logger.info("created vault at %s", db_path)

        cls._run_migrations(connection)

        instance._connection = connection
        instance._db_path = db_path

        atexit.register(cls.close_connection)

        return connection

    @classmethod
    def _run_migrations(cls, connection: sqlite3.Connection) -> None:
        runner = MigrationRunner(connection)
        runner.run_migrations(ALL_MIGRATIONS)

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.commit()
                instance._connection.close()
            except sqlite3.Error:
                logger.warning("error while closing vault connection", exc_info=True)
            finally:
                instance._connection = None
                instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        instance = cls()
        return instance._db_path

    @classmethod
    def execute_with_retry(
        cls,
        connection: sqlite3.Connection,
        sql: str,
        params: tuple | list | dict | None = None,
        max_retries: int = 3,
    ) -> sqlite3.Cursor:
        """Execute SQL with retry logic for database locked errors.

        Args:
            connection: Database connection
            sql: SQL statement to execute
            params: Parameters for SQL statement
            max_retries: Maximum number of attempts

        Returns:
            Cursor after successful execution

        Raises:
            sqlite3.OperationalError: If database remains locked after retries
        """
        for attempt in range(max_retries):
            try:
                if params:
                    return connection.execute(sql, params)
                return connection.execute(sql)
            except sqlite3.OperationalError as e:
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    # Exponential backoff: 0.1s, 0.2s, 0.4s
                    delay = 0.1 * (2**attempt)
                    logger.debug("database locked, retrying in %.1fs", delay)
                    time.sleep(delay)
                    continue
                raise

        raise sqlite3.OperationalError("Max retries exceeded")


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
