"""Command 'repeat' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.recurrence import (
    REPEAT_PRESETS,
    build_repeat_rule,
    describe_repeat,
    parse_weekdays,
)
from dailytodo_cli.utils.task_helpers import resolve_task_id
from dailytodo_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("repeat")
@command_wrapper
async def repeat_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or ID prefix")],
    preset: Annotated[
        str, typer.Argument(help=f"One of: {', '.join(REPEAT_PRESETS)}")
    ],
    weekdays: Annotated[
        str | None,
        typer.Option("--weekdays", help="Weekdays for weekly repeat (mon,fri)"),
    ] = None,
    day: Annotated[
        int | None, typer.Option("--day", help="Day of month for monthly repeat")
    ] = None,
) -> None:
    """Set (or clear with 'none') the repeat rule of a task.

    Weekly needs --weekdays; monthly defaults to the due date's day of month.
    """
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    rule = build_repeat_rule(
        preset,
        weekdays=parse_weekdays(weekdays) if weekdays else None,
        day=day,
        base=task.due_date,
    )
    task = await task_service.set_repeat(resolved_id, rule)

    if task.repeat is None:
        format_success(f"Repeat cleared: {task.title}")
    else:
        format_success(f"{task.title} repeats {describe_repeat(task.repeat)}")
