"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: config,
data and log directories are redirected to temporary paths, and repository
tests run against an in-memory SQLite vault with the real migrations applied.
"""

from __future__ import annotations

import asyncio
import sqlite3
from datetime import datetime
from unittest.mock import patch

import pytest

from dailytodo_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from dailytodo_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from dailytodo_cli.models import Step, Task

_NOW = datetime(2024, 6, 5, 10, 0, 0)  # a Wednesday


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolate_log_dir(tmp_path_factory):
    """Keep the rotating log file out of the real user log directory."""
    log_dir = str(tmp_path_factory.mktemp("logs"))
    with patch("dailytodo_cli.utils.logger.user_log_dir", return_value=log_dir):
        yield log_dir


@pytest.fixture(autouse=True)
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_caches so each test gets fresh services.
    """
    from dailytodo_cli.services.config_service import ConfigService, get_config_service
    from dailytodo_cli.services.factory import get_task_repository

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    get_task_repository.cache_clear()
    with (
        patch("dailytodo_cli.services.config_service.user_config_dir", return_value=tmpdir),
        patch("dailytodo_cli.services.config_service.user_data_dir", return_value=tmpdir),
    ):
        yield ConfigService()
    get_config_service.cache_clear()
    get_task_repository.cache_clear()


# ---------------------------------------------------------------------------
# SQLite vault
# ---------------------------------------------------------------------------


def _create_in_memory_db() -> sqlite3.Connection:
    """Create an in-memory SQLite database with all migrations applied."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    MigrationRunner(conn).run_migrations(ALL_MIGRATIONS)
    return conn


@pytest.fixture
def db():
    """Provide a fresh in-memory database."""
    conn = _create_in_memory_db()
    yield conn
    conn.close()


@pytest.fixture
def repository(db) -> SqliteTaskRepository:
    """A SqliteTaskRepository bound to the in-memory database."""
    repo = SqliteTaskRepository()
    repo._connection = db
    return repo


# ---------------------------------------------------------------------------
# Model builders
# ---------------------------------------------------------------------------


def make_task(**overrides) -> Task:
    """Build a Task with sensible defaults."""
    data = {
        "id": "task-0001",
        "title": "Water the plants",
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    data.update(overrides)
    return Task(**data)


def make_step(title: str, position: int = 0, **overrides) -> Step:
    data = {
        "id": f"step-{position}",
        "task_id": "task-0001",
        "title": title,
        "position": position,
    }
    data.update(overrides)
    return Step(**data)


@pytest.fixture
def task_factory():
    """Return the :func:`make_task` builder."""
    return make_task


@pytest.fixture
def step_factory():
    """Return the :func:`make_step` builder."""
    return make_step


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def seed(tmp_config):
    """Create tasks in the temporary vault through the real TaskService."""
    from dailytodo_cli.services.factory import get_task_service

    def _seed(title: str = "Water the plants", *, steps=(), **kwargs) -> Task:
        async def _create() -> Task:
            service = get_task_service()
            task = await service.add_task(title, **kwargs)
            for step in steps:
                await service.add_step(task.id, step)
            return await service.get_task(task.id)

        return asyncio.run(_create())

    return _seed


@pytest.fixture
def fetch(tmp_config):
    """Read a task back from the temporary vault."""
    from dailytodo_cli.services.factory import get_task_service

    def _fetch(task_id: str) -> Task:
        return asyncio.run(get_task_service().get_task(task_id))

    return _fetch


@pytest.fixture
def all_tasks(tmp_config):
    """List every task in the temporary vault."""
    from dailytodo_cli.services.factory import get_task_service

    def _all() -> list[Task]:
        return asyncio.run(get_task_service().list_tasks())

    return _all
