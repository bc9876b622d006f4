"""Custom exceptions for DailyTodo."""

from __future__ import annotations


class DailyTodoError(Exception):
    """Base exception for all DailyTodo errors."""


class InvalidRuleError(DailyTodoError, ValueError):
    """Raised when a repeat rule has an unrecognized kind or malformed values."""


class NotFoundError(DailyTodoError):
    """Raised when a task or step id is absent from the store."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource.capitalize()} not found: {resource_id}")
        self.resource = resource
        self.resource_id = resource_id


class StoreUnavailableError(DailyTodoError):
    """Raised when the task store cannot be read or written."""
