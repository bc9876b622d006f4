"""Initial database schema migration.

Creates the tasks, steps and last_refreshed tables plus their indexes.
"""

import sqlite3

from dailytodo_cli.adapters.sqlite.schema import ALL_INDEXES, ALL_TABLES

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables."""
        for table_sql in ALL_TABLES:
            connection.execute(table_sql)

        for index_sql in ALL_INDEXES:
            connection.execute(index_sql)


# Export singleton instance
initial_migration = InitialSchemaMigration()
