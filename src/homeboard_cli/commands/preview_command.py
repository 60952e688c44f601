"""Preview the dates a repeating task would be created on."""

from typing import Annotated

import typer

from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.services.context_manager import get_task_service
from homeboard_cli.utils import date_utils
from homeboard_cli.utils.recurrence import describe_repeat
from homeboard_cli.utils.task_helpers import build_repeat_options, parse_date_option
from homeboard_cli.utils.ui.formatters import format_dates, format_output

from .decorators import command_wrapper


@command_wrapper
def preview(
    start: Annotated[
        str | None,
        typer.Option("--start", "-s", help="First possible date (YYYY-MM-DD, default today)"),
    ] = None,
    until: Annotated[
        str | None,
        typer.Option("--until", "-u", help="Last possible date (YYYY-MM-DD)"),
    ] = None,
    days: Annotated[
        str | None,
        typer.Option("--days", help="Weekdays, e.g. mon,wed,fri (default: start's weekday)"),
    ] = None,
    repeat: Annotated[
        str | None,
        typer.Option("--repeat", "-r", help="weekly, biweekly or monthly; omit for a single date"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format: pretty, json, yaml, quiet"),
    ] = None,
) -> None:
    """Show the dates a task would be created on, without saving anything."""
    first = parse_date_option(start, "--start") or date_utils.today()

    task_service = get_task_service()
    repeat_options = build_repeat_options(
        task_service, first, repeat, days, until, single_allowed=True
    )
    dates = task_service.preview_dates(repeat_options, first)

    output_format = output or get_config_service().config.output.format
    if output_format in ("json", "yaml", "quiet"):
        format_output([date_utils.format_date_string(d) for d in dates], output_format)
        return

    format_dates(dates, describe_repeat(repeat_options.weekdays, repeat_options.interval))
