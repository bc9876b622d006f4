"""Unit tests for the MigrationRunner and the initial schema migration."""

from __future__ import annotations

import sqlite3

import pytest

from dailytodo_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, initial_migration
from dailytodo_cli.adapters.sqlite.migrations.runner import Migration, MigrationRunner


# ---------------------------------------------------------------------------
# Concrete test migrations
# ---------------------------------------------------------------------------


class _AddColumnMigration(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add tasks.priority"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("ALTER TABLE tasks ADD COLUMN priority INTEGER DEFAULT 0")


class _FailingMigration(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Intentionally fails"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE half_done (id INTEGER)")
        raise sqlite3.OperationalError("boom")


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _tables(connection: sqlite3.Connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in rows}


class TestMigrationRunner:
    def test_fresh_database_is_version_zero(self, conn):
        assert MigrationRunner(conn).get_current_version() == 0

    def test_initial_schema_creates_tables(self, conn):
        runner = MigrationRunner(conn)
        applied = runner.run_migrations(ALL_MIGRATIONS)

        assert applied == 1
        assert runner.get_current_version() == 1
        assert {"tasks", "steps", "last_refreshed", "schema_version"} <= _tables(conn)

    def test_rerun_is_noop(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations(ALL_MIGRATIONS)
        assert runner.run_migrations(ALL_MIGRATIONS) == 0

    def test_pending_migrations_run_in_order(self, conn):
        runner = MigrationRunner(conn)
        applied = runner.run_migrations([_AddColumnMigration(), initial_migration])

        assert applied == 2
        history = runner.get_migration_history()
        assert [h["version"] for h in history] == [1, 2]
        assert history[1]["description"] == "Add tasks.priority"

    def test_old_version_rejected(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migration(initial_migration)
        with pytest.raises(ValueError, match="not greater"):
            runner.run_migration(initial_migration)

    def test_failed_migration_rolls_back(self, conn):
        runner = MigrationRunner(conn)
        runner.run_migrations(ALL_MIGRATIONS)

        with pytest.raises(RuntimeError, match="Migration 2 failed"):
            runner.run_migration(_FailingMigration())

        assert runner.get_current_version() == 1


class TestInitialSchema:
    def test_marker_table_holds_a_single_row(self, conn):
        MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)
        conn.execute("INSERT INTO last_refreshed (id, value) VALUES (1, 'x')")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO last_refreshed (id, value) VALUES (2, 'y')")

    def test_unknown_repeat_type_rejected(self, conn):
        MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO tasks (id, title, repeat_type, created_at, updated_at) "
                "VALUES ('t', 'x', 'yearly', 'now', 'now')"
            )
