"""Command 'complete' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import (
    console,
    format_due_date,
    format_output,
    format_success,
)

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("complete")
@command_wrapper
async def complete_command(
    task_ids: Annotated[
        list[str], typer.Argument(help="Task ID(s) - can specify multiple")
    ],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Mark one or more tasks as completed.

    Completing a repeating task creates its next occurrence.
    """
    output = resolve_output(output, json_opt)
    task_service = get_task_service()

    results = []
    for task_id in task_ids:
        resolved_id = await resolve_task_id(task_service, task_id)
        results.append(await task_service.set_completed(resolved_id, True))

    if output != "pretty":
        format_output(results, output)
        return

    for result in results:
        title = result.task.title
        if len(title) > 60:
            title = title[:57] + "..."
        format_success(f"✓ Completed: {title}")
        if result.spawned is not None:
            due = (
                format_due_date(result.spawned.due_date)
                if result.spawned.due_date
                else "no date"
            )
            console.print(f"[cyan]🔄 Next occurrence: {due}[/cyan]")

    console.print(f"[dim]To undo: dailytodo reopen {' '.join(task_ids)}[/dim]")
