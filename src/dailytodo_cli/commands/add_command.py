"""Command 'add' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service
from dailytodo_cli.utils.dates import parse_due_date
from dailytodo_cli.utils.recurrence import (
    REPEAT_PRESETS,
    build_repeat_rule,
    describe_repeat,
    parse_weekdays,
)
from dailytodo_cli.utils.ui.formatters import console, format_output, format_success

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[
        list[str] | None, typer.Argument(help="Task title (blank for \"Untitled\")")
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due date (today, tomorrow, 2024-03-15, ...)"),
    ] = None,
    memo: Annotated[str, typer.Option("--memo", "-m", help="Note")] = "",
    today: Annotated[
        bool, typer.Option("--today", "-t", help="Add to today's list")
    ] = False,
    repeat: Annotated[
        str | None,
        typer.Option("--repeat", "-r", help=f"Repeat: {', '.join(REPEAT_PRESETS)}"),
    ] = None,
    weekdays: Annotated[
        str | None,
        typer.Option("--weekdays", help="Weekdays for weekly repeat (mon,fri)"),
    ] = None,
    day: Annotated[
        int | None, typer.Option("--day", help="Day of month for monthly repeat")
    ] = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Add a new task."""
    output = resolve_output(output, json_opt)

    due_date = parse_due_date(due) if due else None
    rule = None
    if repeat:
        rule = build_repeat_rule(
            repeat,
            weekdays=parse_weekdays(weekdays) if weekdays else None,
            day=day,
            base=due_date,
        )

    task_service = get_task_service()
    task = await task_service.add_task(
        " ".join(title or []),
        memo=memo,
        due_date=due_date,
        is_today=today,
        repeat=rule,
    )

    if output == "pretty":
        format_success(f"Task created: {task.title}")
        if task.repeat is not None:
            console.print(f"[dim]Repeats {describe_repeat(task.repeat)}[/dim]")
        console.print(f"[dim]ID: {task.id}[/dim]")
    else:
        format_output(task, output)
