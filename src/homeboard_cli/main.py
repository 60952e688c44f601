"""Main entry point for Homeboard CLI."""

import typer

from homeboard_cli import __version__
from homeboard_cli.commands import config, preview_command, tasks, templates
from homeboard_cli.exceptions import ConfigError
from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.utils.typer_helpers import SuggestingGroup
from homeboard_cli.utils.ui.console import get_console
from homeboard_cli.utils.ui.formatters import format_error

# Create main app with custom group class
app = typer.Typer(
    name="homeboard",
    cls=SuggestingGroup,
    help="Household task board with weekly, biweekly and monthly repeating tasks",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main(ctx: typer.Context) -> None:
    try:
        console.no_color = not get_config_service().config.output.color
    except ConfigError as e:
        # config commands stay usable so a broken file can be reset
        if ctx.invoked_subcommand == "config":
            return
        format_error(str(e))
        raise typer.Exit(code=e.exit_code) from e


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(templates.app, name="templates", help="Reusable task presets")
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("preview")(preview_command.preview)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Homeboard CLI[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
