"""Command 'show' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("show")
@command_wrapper
async def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show a task with its steps."""
    output = resolve_output(output, json_opt)

    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)
    format_output(task, output)
