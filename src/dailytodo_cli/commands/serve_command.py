"""Command 'serve' of dailytodo-cli"""

import asyncio
from typing import Annotated

import typer

from dailytodo_cli.services.config_service import get_config_service
from dailytodo_cli.services.factory import get_today_sync_service
from dailytodo_cli.services.scheduler import start_scheduler, stop_scheduler
from dailytodo_cli.utils.logger import enable_console_logging
from dailytodo_cli.utils.ui.formatters import console

from .decorators import command_wrapper

app = typer.Typer()


@app.command("serve")
@command_wrapper
async def serve_command(
    interval: Annotated[
        int | None,
        typer.Option(
            "--interval", "-i", min=1, help="Seconds between checks (default from config)"
        ),
    ] = None,
    duration: Annotated[
        float | None,
        typer.Option("--duration", help="Stop after this many seconds"),
    ] = None,
) -> None:
    """Keep today's list fresh until interrupted (Ctrl+C).

    Refreshes once at start, then checks every interval and refreshes when
    the day changes.
    """
    config = get_config_service().config
    enable_console_logging(config.log_level)

    interval_seconds = interval or config.scheduler.interval_seconds
    await start_scheduler(
        get_today_sync_service(),
        interval_seconds,
        force_on_start=config.scheduler.force_on_start,
    )
    console.print(
        f"[green]Scheduler running[/green] [dim](every {interval_seconds}s, Ctrl+C to stop)[/dim]"
    )

    try:
        if duration is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(duration)
    finally:
        await stop_scheduler()
