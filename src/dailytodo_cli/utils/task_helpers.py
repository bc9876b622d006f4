"""Task helper utilities."""

from __future__ import annotations

from dailytodo_cli.models import NotFoundError, Task
from dailytodo_cli.services.task_service import TaskService
from dailytodo_cli.utils.ui.formatters import calculate_unique_prefixes


async def resolve_task_id(task_service: TaskService, task_id_or_prefix: str) -> str:
    """
    Resolve a task ID or ID prefix to a full task ID.

    Args:
        task_service: The task service instance
        task_id_or_prefix: Full task ID or the leading characters of one

    Returns:
        The full task ID

    Raises:
        NotFoundError: If no task matches
        ValueError: If the prefix is empty or matches several tasks
    """
    prefix = task_id_or_prefix.strip().lstrip("#")
    if not prefix:
        raise ValueError("Task ID cannot be empty")

    matching_tasks = await task_service.list_tasks(id_prefix=prefix)

    if not matching_tasks:
        raise NotFoundError("task", prefix)

    exact = [task for task in matching_tasks if task.id == prefix]
    if exact:
        return exact[0].id

    if len(matching_tasks) > 1:
        prefix_map = calculate_unique_prefixes([task.id for task in matching_tasks])
        suggestions = []
        for task in matching_tasks:
            title = task.title
            if len(title) > 70:
                title = title[:67] + "..."
            suggestions.append(f"  [{task.id[: prefix_map[task.id]]}] {title}")

        raise ValueError(
            f"Multiple tasks match prefix '{prefix}':\n"
            + "\n".join(suggestions)
            + "\n\nUse the prefix in brackets to select a specific task."
        )

    return matching_tasks[0].id


def resolve_step_id(task: Task, step_ref: str) -> str:
    """
    Resolve a step reference within a task.

    Args:
        task: Task owning the step
        step_ref: 1-based step number as shown by ``show``, or a step ID prefix

    Returns:
        The full step ID

    Raises:
        NotFoundError: If no step matches
        ValueError: If an ID prefix matches several steps
    """
    ref = step_ref.strip()
    if ref.isdigit():
        number = int(ref)
        if 1 <= number <= len(task.steps):
            return task.steps[number - 1].id
        raise NotFoundError("step", ref)

    matches = [step for step in task.steps if step.id.startswith(ref)] if ref else []
    if not matches:
        raise NotFoundError("step", ref)
    if len(matches) > 1:
        raise ValueError(f"Multiple steps match prefix '{ref}'")
    return matches[0].id
