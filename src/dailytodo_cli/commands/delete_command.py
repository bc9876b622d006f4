"""Command 'delete' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete a task and its steps."""
    task_service = get_task_service()

    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    if not force:
        confirm = typer.confirm(f"Delete task '{task.title}'?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    await task_service.delete_task(resolved_id)
    format_success(f"Deleted: {task.title}")
