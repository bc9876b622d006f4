"""Command 'step' of dailytodo-cli - manage the steps of a task.

Steps are addressed by their number in ``dailytodo show`` (1-based) or by
an ID prefix.
"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.services.task_service import TaskService
from dailytodo_cli.utils.task_helpers import resolve_step_id, resolve_task_id
from dailytodo_cli.utils.typer_helpers import SuggestingGroup
from dailytodo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Manage task steps", no_args_is_help=True)

TaskArg = Annotated[str, typer.Argument(help="Task ID or ID prefix")]
StepArg = Annotated[str, typer.Argument(help="Step number or step ID prefix")]


async def _resolve(task_service: TaskService, task_id: str, step: str) -> str:
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)
    return resolve_step_id(task, step)


@app.command("add")
@command_wrapper
async def add_step(
    task_id: TaskArg,
    title: Annotated[list[str], typer.Argument(help="Step text")],
) -> None:
    """Append a step to a task."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    step = await task_service.add_step(resolved_id, " ".join(title))
    format_success(f"Step added: {step.title}")


@app.command("done")
@command_wrapper
async def complete_step(task_id: TaskArg, step: StepArg) -> None:
    """Mark a step as done."""
    task_service = get_task_service()
    step_id = await _resolve(task_service, task_id, step)
    updated = await task_service.set_step_completed(step_id, True)
    format_success(f"✓ {updated.title}")


@app.command("undo")
@command_wrapper
async def reopen_step(task_id: TaskArg, step: StepArg) -> None:
    """Mark a step as not done."""
    task_service = get_task_service()
    step_id = await _resolve(task_service, task_id, step)
    updated = await task_service.set_step_completed(step_id, False)
    format_success(f"Reopened step: {updated.title}")


@app.command("rename")
@command_wrapper
async def rename_step(
    task_id: TaskArg,
    step: StepArg,
    title: Annotated[list[str], typer.Argument(help="New step text")],
) -> None:
    """Rename a step."""
    task_service = get_task_service()
    step_id = await _resolve(task_service, task_id, step)
    updated = await task_service.rename_step(step_id, " ".join(title))
    format_success(f"Step renamed: {updated.title}")


@app.command("delete")
@command_wrapper
async def delete_step(task_id: TaskArg, step: StepArg) -> None:
    """Delete a step."""
    task_service = get_task_service()
    step_id = await _resolve(task_service, task_id, step)
    await task_service.delete_step(step_id)
    format_success("Step deleted")
