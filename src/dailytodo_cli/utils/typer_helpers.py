"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from dailytodo_cli.utils.ui.formatters import console


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with "Did you mean ...?"."""

    def _is_unknown_command(self, ctx, name: str) -> bool:
        if ctx.resilient_parsing or name.startswith("-"):
            return False
        if self.get_command(ctx, name) is not None:
            return False
        if ctx.token_normalize_func is not None:
            return self.get_command(ctx, ctx.token_normalize_func(name)) is None
        return True

    def resolve_command(self, ctx, args):
        if args and self._is_unknown_command(ctx, args[0]):
            attempted = args[0]
            suggestions = get_close_matches(
                attempted, list(self.commands), n=3, cutoff=0.6
            )
            if suggestions:
                console.print(
                    f'[red]Error:[/red] unknown command "{escape(attempted)}" '
                    f'for "{ctx.info_name}"'
                )
                console.print()
                if len(suggestions) == 1:
                    console.print("[yellow]Did you mean this?[/yellow]")
                else:
                    console.print("[yellow]Did you mean one of these?[/yellow]")
                for suggestion in suggestions:
                    console.print(f"        {suggestion}")
                raise typer.Exit(2)
        return super().resolve_command(ctx, args)
