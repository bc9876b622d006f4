"""Task service - Business logic for task operations.

This service layer sits between commands and repositories, providing
a clean API for task-related business logic. Completing a recurring task
goes through here so the next occurrence is spawned exactly once.
"""

from __future__ import annotations

import logging
from datetime import datetime

from dailytodo_cli.models import (
    CompletionResult,
    MonthlyRepeat,
    Step,
    StepCreate,
    StepUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    WeeklyRepeat,
)
from dailytodo_cli.repositories import TaskRepository
from dailytodo_cli.services.occurrence_service import OccurrenceService

logger = logging.getLogger(__name__)

TASK_VIEWS = ("all", "today", "planned")


def _parse_due_date(due_date: str | datetime | None) -> datetime | None:
    if due_date is None or isinstance(due_date, datetime):
        return due_date
    return datetime.fromisoformat(due_date)


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        occurrence_service: OccurrenceService | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            occurrence_service: Spawner used on completion (built from the
                repository when omitted)
        """
        self.repository = task_repository
        self.occurrence_service = occurrence_service or OccurrenceService(
            task_repository
        )

    async def list_tasks(
        self,
        view: str = "all",
        *,
        is_completed: bool | None = None,
        id_prefix: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """List tasks of a view.

        Args:
            view: "all", "today" (flagged for today) or "planned" (has a due date)
            is_completed: Filter by completion status
            id_prefix: Only tasks whose id starts with this prefix
            search: Text search over title and memo
            limit: Maximum number of results

        Returns:
            Tasks sorted by due date (latest first, undated last), then
            newest first

        Raises:
            ValueError: If view is unknown
        """
        if view not in TASK_VIEWS:
            raise ValueError(
                f"Unknown view '{view}' (expected one of {', '.join(TASK_VIEWS)})"
            )

        filters = TaskFilters(
            is_today=True if view == "today" else None,
            has_due_date=True if view == "planned" else None,
            is_completed=is_completed,
            id_prefix=id_prefix,
            search=search,
            limit=limit,
        )
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.repository.get(task_id)

    async def add_task(
        self,
        title: str,
        *,
        memo: str = "",
        due_date: str | datetime | None = None,
        is_today: bool = False,
        repeat: WeeklyRepeat | MonthlyRepeat | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task text; blank becomes "Untitled"
            memo: Free-form note
            due_date: Due date (ISO format or datetime)
            is_today: Put the task in today's list
            repeat: Optional repeat rule

        Returns:
            Created Task object
        """
        task_data = TaskCreate(
            title=title,
            memo=memo,
            due_date=_parse_due_date(due_date),
            is_today=is_today,
            repeat=repeat,
        )
        task = await self.repository.add(task_data)
        logger.info("task created id=%s", task.id)
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        memo: str | None = None,
        due_date: str | datetime | None = None,
        clear_due_date: bool = False,
    ) -> Task:
        """Update title, memo or due date of a task.

        Args:
            task_id: Task ID to update
            title: New title
            memo: New memo
            due_date: New due date
            clear_due_date: Remove the due date

        Returns:
            Updated Task object
        """
        fields: dict[str, object] = {}
        if title is not None:
            fields["title"] = title.strip() or "Untitled"
        if memo is not None:
            fields["memo"] = memo
        if clear_due_date:
            fields["due_date"] = None
        elif due_date is not None:
            fields["due_date"] = _parse_due_date(due_date)

        return await self.repository.update(task_id, TaskUpdate(**fields))

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task and its steps."""
        deleted = await self.repository.delete(task_id)
        logger.info("task deleted id=%s", task_id)
        return deleted

    async def set_completed(self, task_id: str, completed: bool) -> CompletionResult:
        """Toggle completion of a task.

        Completing a recurring task whose next occurrence has not been spawned
        yet claims the spawn and creates the next occurrence. Reopening never
        spawns and leaves ``repeat_created`` alone.

        Returns:
            The updated task and the spawned occurrence (if any)
        """
        task = await self.repository.get(task_id)
        if task.is_completed == completed:
            return CompletionResult(task=task)

        spawned = None
        if completed and task.repeat is not None and not task.repeat_created:
            if await self.repository.claim_repeat_spawn(task.id):
                try:
                    spawned = await self.occurrence_service.on_task_completed(task)
                except Exception:
                    # Release the claim so a later completion can retry
                    await self.repository.update(
                        task.id, TaskUpdate(repeat_created=False)
                    )
                    raise
            else:
                logger.info("next occurrence of task %s already spawned", task.id)

        updated = await self.repository.update(
            task.id,
            TaskUpdate(
                is_completed=completed,
                completed_at=datetime.now() if completed else None,
            ),
        )
        return CompletionResult(task=updated, spawned=spawned)

    async def set_today(self, task_id: str, value: bool) -> Task:
        """Manually add a task to (or remove it from) today's list."""
        return await self.repository.update(task_id, TaskUpdate(is_today=value))

    async def set_repeat(
        self, task_id: str, rule: WeeklyRepeat | MonthlyRepeat | None
    ) -> Task:
        """Set or clear the repeat rule.

        Also resets ``repeat_created`` so the next completion spawns again.
        """
        return await self.repository.update(
            task_id, TaskUpdate(repeat=rule, repeat_created=False)
        )

    async def add_step(self, task_id: str, title: str) -> Step:
        """Append a step to a task.

        Raises:
            ValueError: If title is blank
        """
        title = title.strip()
        if not title:
            raise ValueError("Step title cannot be empty")
        return await self.repository.add_step(task_id, StepCreate(title=title))

    async def set_step_completed(self, step_id: str, completed: bool) -> Step:
        return await self.repository.update_step(
            step_id, StepUpdate(is_completed=completed)
        )

    async def rename_step(self, step_id: str, title: str) -> Step:
        title = title.strip()
        if not title:
            raise ValueError("Step title cannot be empty")
        return await self.repository.update_step(step_id, StepUpdate(title=title))

    async def delete_step(self, step_id: str) -> bool:
        return await self.repository.delete_step(step_id)
