"""Command 'reopen' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("reopen")
@command_wrapper
async def reopen_command(
    task_ids: Annotated[list[str], typer.Argument(help="Task ID(s) to reopen")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Reopen completed tasks.

    Reopening never creates another occurrence of a repeating task.
    """
    output = resolve_output(output, json_opt)
    task_service = get_task_service()

    tasks = []
    for task_id in task_ids:
        resolved_id = await resolve_task_id(task_service, task_id)
        result = await task_service.set_completed(resolved_id, False)
        tasks.append(result.task)

    if output == "pretty":
        for task in tasks:
            format_success(f"Reopened: {task.title}")
    else:
        format_output(tasks, output)
