"""Command-name resolution for the homeboard command groups."""

from __future__ import annotations

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from homeboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from homeboard_cli.utils.ui.formatters import format_error


def suggest_commands(attempted: str, names: list[str]) -> list[str]:
    """Commands the user may have meant: prefix matches first, then near misses."""
    prefixed = [name for name in names if name.startswith(attempted)]
    if prefixed:
        return prefixed
    return get_close_matches(attempted, names, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group accepting unique command prefixes (``homeboard ta li``).

    An unknown or ambiguous name is reported with the likely candidates.
    """

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command

        matches = [name for name in self.list_commands(ctx) if name.startswith(cmd_name)]
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        return None

    def resolve_command(self, ctx: click.Context, args: list[str]):
        try:
            name, command, rest = super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            candidates = suggest_commands(args[0], self.list_commands(ctx))
            if not candidates:
                raise
            shown = ", ".join(candidates)
            format_error(
                f'Unknown command "{args[0]}" for "{ctx.info_name}". Did you mean: {shown}?'
            )
            raise typer.Exit(code=ERROR_INVALID_ARGS) from e
        # Report the full name, not the prefix that was typed
        return (command.name if command else name), command, rest
