"""Command 'sync' of dailytodo-cli"""

from typing import Annotated

import typer

from dailytodo_cli.services.factory import get_today_sync_service
from dailytodo_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer()


@app.command("sync")
@command_wrapper
async def sync_command(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Run even if already refreshed today")
    ] = False,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Refresh today's list from due dates."""
    output = resolve_output(output, json_opt)

    result = await get_today_sync_service().run_today_sync(force=force)

    if output != "pretty":
        format_output(result, output)
    elif result.skipped:
        format_info("Today's list is already up to date (use --force to refresh again)")
    else:
        format_success(
            f"Today's list refreshed: {result.cleared_count} cleared, "
            f"{result.set_count} due today"
        )
