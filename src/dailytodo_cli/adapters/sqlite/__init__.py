"""SQLite adapter: local vault connection, migrations and task repository."""

from .connection import DatabaseConnection, get_connection
from .task_repository import SqliteTaskRepository

__all__ = ["DatabaseConnection", "get_connection", "SqliteTaskRepository"]
