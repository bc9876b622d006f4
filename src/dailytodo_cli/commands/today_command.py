"""Command 'today' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("today")
@command_wrapper
async def today_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    value: Annotated[
        bool | None,
        typer.Option("--on/--off", help="Add to (or remove from) today; toggles if omitted"),
    ] = None,
) -> None:
    """Add a task to today's list, or remove it."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)

    if value is None:
        task = await task_service.get_task(resolved_id)
        value = not task.is_today

    task = await task_service.set_today(resolved_id, value)
    if task.is_today:
        format_success(f"☀️  Added to today: {task.title}")
    else:
        format_success(f"Removed from today: {task.title}")
