"""Command 'edit' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.dates import parse_due_date
from dailytodo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("edit")
@command_wrapper
async def edit_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    memo: Annotated[str | None, typer.Option("--memo", "-m", help="New memo")] = None,
    due: Annotated[
        str | None, typer.Option("--due", "-d", help="New due date")
    ] = None,
    no_due: Annotated[
        bool, typer.Option("--no-due", help="Remove the due date")
    ] = False,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Edit the title, memo or due date of a task."""
    output = resolve_output(output, json_opt)

    if due and no_due:
        raise AppError(
            "Use either --due or --no-due, not both", exit_code=ERROR_INVALID_ARGS
        )
    if title is None and memo is None and due is None and not no_due:
        raise AppError(
            "Nothing to change (use --title, --memo, --due or --no-due)",
            exit_code=ERROR_INVALID_ARGS,
        )

    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.update_task(
        resolved_id,
        title=title,
        memo=memo,
        due_date=parse_due_date(due) if due else None,
        clear_due_date=no_due,
    )

    if output == "pretty":
        format_success(f"Updated: {task.title}")
    else:
        format_output(task, output)
