"""Options shared by several commands."""

from typing import Annotated

import typer

from dailytodo_cli.services.config_service import get_config_service

OUTPUT_FORMATS = ("pretty", "json", "yaml")

OutputOption = Annotated[
    str | None,
    typer.Option(
        "--output", "-o", help="Output format: pretty, json or yaml (default from config)"
    ),
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
]


def resolve_output(output: str | None, json_opt: bool = False) -> str:
    """Pick the output format from the flags, falling back to ``output.format``."""
    if json_opt:
        return "json"
    if output is None:
        return get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format '{output}' (expected one of {', '.join(OUTPUT_FORMATS)})"
        )
    return output
