"""Services module for DailyTodo CLI - Business logic layer."""

from .occurrence_service import OccurrenceService
from .scheduler import (
    TodaySyncScheduler,
    get_scheduler,
    start_scheduler,
    stop_scheduler,
)
from .task_service import TaskService
from .today_sync_service import TodaySyncService

__all__ = [
    "TaskService",
    "OccurrenceService",
    "TodaySyncService",
    "TodaySyncScheduler",
    "start_scheduler",
    "stop_scheduler",
    "get_scheduler",
]
