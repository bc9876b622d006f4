"""Configuration management commands."""

from typing import Annotated

import typer

from dailytodo_cli.services.config_service import get_config_service
from dailytodo_cli.utils.exit_codes import ERROR_INVALID_ARGS
from dailytodo_cli.utils.typer_helpers import SuggestingGroup
from dailytodo_cli.utils.ui.formatters import (
    console,
    format_info,
    format_output,
    format_success,
)

from .decorators import AppError, command_wrapper
from .options import JsonOption, OutputOption, resolve_output

app = typer.Typer(
    cls=SuggestingGroup, help="Configuration management commands", no_args_is_help=True
)


def _parse_value(value: str) -> str | int | bool | None:
    """Convert a command-line value to the type config expects."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none"):
        return None
    if value.isdigit():
        return int(value)
    return value


@app.command("show")
@command_wrapper
def show_config(
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show the current configuration."""
    output = resolve_output(output, json_opt)
    config_svc = get_config_service()
    format_output(config_svc.config, output)
    if output == "pretty":
        console.print(f"[dim]Config file: {config_svc.config_path}[/dim]")
        console.print(f"[dim]Vault: {config_svc.database_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Key, e.g. scheduler.interval_seconds")],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Key, e.g. scheduler.interval_seconds")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[
        str | None, typer.Argument(help="Key to reset (all keys if omitted)")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not typer.confirm(f"Reset {target} to defaults?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Reset {key or 'configuration'} to defaults")
