"""Configuration management commands."""

from typing import Annotated

import typer

from homeboard_cli.exceptions import ValidationError
from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.utils.typer_helpers import SuggestingGroup
from homeboard_cli.utils.ui.console import get_console
from homeboard_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands", no_args_is_help=True)
console = get_console()


def _lookup(key: str):
    try:
        return get_config_service().get(key)
    except KeyError as e:
        raise ValidationError(e.args[0]) from e


@app.command("show")
@command_wrapper
def show_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "pretty",
) -> None:
    """Show the current configuration."""
    config_service = get_config_service()
    data = config_service.config.model_dump()
    data["config_file"] = str(config_service.config_path)
    data["database_file"] = str(config_service.get_db_path())
    format_output(data, output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., schedule.horizon_days)")],
) -> None:
    """Get a configuration value."""
    value = _lookup(key)
    console.print("" if value is None else str(value), markup=False)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., schedule.horizon_days)")],
    value: Annotated[str, typer.Argument(help="Configuration value ('none' to clear)")],
) -> None:
    """Set a configuration value."""
    _lookup(key)
    get_config_service().set(key, value)
    format_success(f"Configuration '{key}' set to '{_lookup(key)}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if key:
        _lookup(key)

    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

    get_config_service().reset_config(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
