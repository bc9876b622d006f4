"""Command 'list' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_task_service, get_today_sync_service
from dailytodo_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("list")
@command_wrapper
async def list_command(
    view: Annotated[
        str, typer.Argument(help="View: all, today or planned")
    ] = "all",
    completed: Annotated[
        bool | None,
        typer.Option(
            "--completed/--open", help="Only completed (or only open) tasks"
        ),
    ] = None,
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Search title and memo")
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Limit results")
    ] = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """List tasks (all, today or planned)."""
    output = resolve_output(output, json_opt)

    # Bring the today-set up to date first; a no-op if it already ran today
    await get_today_sync_service().run_today_sync()

    task_service = get_task_service()
    tasks = await task_service.list_tasks(
        view, is_completed=completed, search=search, limit=limit
    )
    format_output(tasks, output, view=view)
