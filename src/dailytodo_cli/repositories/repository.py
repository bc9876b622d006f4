"""Repository abstraction layer for DailyTodo.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The recurrence and today-set services only talk to this interface, so the
storage mechanism (local SQLite today) can change without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from dailytodo_cli.models import (
    Step,
    StepCreate,
    StepUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)


class TaskRepository(ABC):
    """Abstract base class for task, step and refresh-marker persistence.

    Implementations wrap backend failures in StoreUnavailableError and raise
    NotFoundError for absent ids.
    """

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks (with their steps) matching the filters.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            List of Task objects matching the filters
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(
        self, task_data: TaskCreate, steps: Sequence[StepCreate] = ()
    ) -> Task:
        """Create a new task with a fresh identifier.

        Steps are appended in order. The task and its steps are written
        together or not at all.

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update the fields explicitly set on ``updates``.

        Returns:
            Updated Task object

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task and its steps.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def claim_repeat_spawn(self, task_id: str) -> bool:
        """Atomically flip ``repeat_created`` from false to true.

        Returns:
            True if this caller performed the flip, False if it was already set

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.claim_repeat_spawn() must be implemented by adapter"
        )

    @abstractmethod
    async def add_step(self, task_id: str, step_data: StepCreate) -> Step:
        """Append a step to a task.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.add_step() must be implemented by adapter"
        )

    @abstractmethod
    async def update_step(self, step_id: str, updates: StepUpdate) -> Step:
        """Update a step.

        Raises:
            NotFoundError: If step does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update_step() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_step(self, step_id: str) -> bool:
        """Delete a step.

        Raises:
            NotFoundError: If step does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete_step() must be implemented by adapter"
        )

    @abstractmethod
    async def get_last_refresh_marker(self) -> datetime | None:
        """Return when the today-set was last refreshed, or None if never."""
        raise NotImplementedError(
            "TaskRepository.get_last_refresh_marker() must be implemented by adapter"
        )

    @abstractmethod
    async def upsert_last_refresh_marker(self, value: datetime) -> None:
        """Create or overwrite the last-refresh marker."""
        raise NotImplementedError(
            "TaskRepository.upsert_last_refresh_marker() must be implemented by adapter"
        )
