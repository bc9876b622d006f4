"""Occurrence service - spawns the next occurrence of a recurring task.

When a task carrying a repeat rule is completed, a fresh copy is created with
the next due date computed by :func:`resolve_next_occurrence`. Steps are
cloned in order with new ids and reset completion, in the same write as the
copy itself.
"""

from __future__ import annotations

import logging

from dailytodo_cli.models import StepCreate, Task, TaskCreate
from dailytodo_cli.repositories import TaskRepository
from dailytodo_cli.utils.dates import start_of_today
from dailytodo_cli.utils.recurrence import NO_OCCURRENCE, resolve_next_occurrence

logger = logging.getLogger(__name__)


class OccurrenceService:
    """Service creating the next occurrence of completed recurring tasks."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the occurrence service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def on_task_completed(self, task: Task) -> Task | None:
        """Spawn the next occurrence of a just-completed task.

        Does nothing for tasks without a repeat rule, for tasks whose next
        occurrence was already spawned, and for inert rules.

        Args:
            task: The task as it was when completed

        Returns:
            The newly created task, or None if nothing was spawned

        Raises:
            InvalidRuleError: If the stored rule is not a known repeat rule
        """
        if task.repeat is None or task.repeat_created:
            return None

        base_due_date = task.due_date or start_of_today()
        next_due = resolve_next_occurrence(task.repeat, base_due_date)
        if next_due is NO_OCCURRENCE:
            logger.info("repeat rule of task %s yields no next occurrence", task.id)
            return None

        spawned = await self.repository.add(
            TaskCreate(
                title=task.title,
                memo=task.memo,
                due_date=next_due,
                is_today=False,
                is_completed=False,
                repeat=task.repeat,
            ),
            steps=[
                StepCreate(title=step.title, is_completed=False) for step in task.steps
            ],
        )

        logger.info(
            "spawned occurrence %s of task %s due %s",
            spawned.id,
            task.id,
            next_due.isoformat(),
        )
        return spawned
