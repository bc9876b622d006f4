"""Command 'version' of dailytodo-cli"""

import typer

from dailytodo_cli import __version__
from dailytodo_cli.utils.ui.formatters import console

app = typer.Typer()


@app.command("version")
def version_command() -> None:
    """Show version information"""
    console.print(f"[bold]DailyTodo CLI[/bold] version [cyan]{__version__}[/cyan]", highlight=False)
