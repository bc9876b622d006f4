"""Main entry point for DailyTodo CLI."""

import typer

from dailytodo_cli.commands import (
    add_command,
    complete_command,
    config_command,
    delete_command,
    edit_command,
    list_command,
    reopen_command,
    repeat_command,
    serve_command,
    show_command,
    step_command,
    sync_command,
    today_command,
    version_command,
)
from dailytodo_cli.services.config_service import get_config_service
from dailytodo_cli.utils.logger import get_logger
from dailytodo_cli.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="dailytodo",
    cls=SuggestingGroup,
    help="A daily task tracker with due dates, steps and repeating tasks",
    no_args_is_help=True,
)

# Top-level commands: each module holds a single-command Typer app
for _module in (
    add_command,
    list_command,
    show_command,
    edit_command,
    complete_command,
    reopen_command,
    delete_command,
    today_command,
    repeat_command,
    sync_command,
    serve_command,
    version_command,
):
    app.registered_commands.extend(_module.app.registered_commands)

app.add_typer(step_command.app, name="step", help="Manage task steps")
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """A daily task tracker with due dates, steps and repeating tasks."""
    get_logger().setLevel(get_config_service().config.log_level)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
