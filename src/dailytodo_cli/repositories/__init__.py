"""Repository interfaces (ports) for DailyTodo."""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
