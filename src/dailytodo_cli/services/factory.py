"""Bootstrap functions wiring the SQLite vault to the services.

Usage Pattern:
    from dailytodo_cli.services.factory import get_task_service

    task_service = get_task_service()
    tasks = await task_service.list_tasks("today")

The vault path comes from ConfigService (``database_path``), falling back to
the platform data directory.
"""

from __future__ import annotations

from functools import lru_cache

from dailytodo_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from dailytodo_cli.repositories import TaskRepository
from dailytodo_cli.services.config_service import get_config_service
from dailytodo_cli.services.task_service import TaskService
from dailytodo_cli.services.today_sync_service import TodaySyncService


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Get the cached repository for the configured vault."""
    config_svc = get_config_service()
    return SqliteTaskRepository(db_path=str(config_svc.database_path))


def get_task_service() -> TaskService:
    return TaskService(get_task_repository())


def get_today_sync_service() -> TodaySyncService:
    return TodaySyncService(get_task_repository())
