"""Task template commands."""

from typing import Annotated, get_args

import typer

from homeboard_cli.exceptions import ValidationError
from homeboard_cli.models import REPEAT_INTERVALS, TaskPriority, TaskTemplateCreate
from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.services.context_manager import get_template_service
from homeboard_cli.utils.recurrence import describe_repeat, parse_weekdays
from homeboard_cli.utils.typer_helpers import SuggestingGroup
from homeboard_cli.utils.ui.console import get_console
from homeboard_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_templates,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task template commands", no_args_is_help=True)
console = get_console()

PRIORITIES = get_args(TaskPriority)

OutputOption = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Output format: pretty, table, json, yaml, quiet"),
]


def _show(templates: list[dict], output: str | None) -> None:
    output_format = output or get_config_service().config.output.format
    if output_format == "quiet":
        for template in templates:
            print(template["name"])
    elif output_format in ("json", "yaml"):
        format_output(templates, output_format)
    else:
        format_templates(templates)


@app.command("add")
@command_wrapper
async def add_template(
    name: Annotated[str, typer.Argument(help="Template name, used with 'tasks add --template'")],
    title: Annotated[
        str | None, typer.Option("--title", help="Task title (defaults to the name)")
    ] = None,
    description: Annotated[str | None, typer.Option("--description")] = None,
    priority: Annotated[
        str, typer.Option("--priority", "-p", help="low, medium, high or urgent")
    ] = "medium",
    at: Annotated[str | None, typer.Option("--time", help="Time of day (HH:MM)")] = None,
    repeat: Annotated[
        str | None, typer.Option("--repeat", "-r", help="weekly, biweekly or monthly")
    ] = None,
    days: Annotated[
        str | None, typer.Option("--days", help="Weekdays to repeat on, e.g. mon,fri")
    ] = None,
    assignee: Annotated[
        str | None, typer.Option("--assignee", "-a", help="Household member")
    ] = None,
) -> None:
    """Save a reusable task preset."""
    if priority not in PRIORITIES:
        raise ValidationError(f"--priority must be one of: {', '.join(PRIORITIES)}")
    if repeat is not None and repeat not in REPEAT_INTERVALS:
        raise ValidationError(f"--repeat must be one of: {', '.join(REPEAT_INTERVALS)}")
    if days and repeat is None:
        raise ValidationError("--days requires --repeat")
    try:
        weekdays = parse_weekdays(days) if days else frozenset()
    except ValueError as e:
        raise ValidationError(f"--days: {e}") from e

    template = await get_template_service().create_template(
        TaskTemplateCreate(
            name=name,
            title=title or name,
            description=description,
            priority=priority,
            default_time=at,
            repeat_interval=repeat,
            repeat_days=weekdays,
            assignee=assignee,
        )
    )

    format_success(f"Template saved: {template.name}")
    summary = describe_repeat(template.repeat_days, template.repeat_interval)
    if summary:
        console.print(f"[dim]{summary}[/dim]")


@app.command("list")
@command_wrapper
async def list_templates(output: OutputOption = None) -> None:
    """List saved templates."""
    templates = await get_template_service().list_templates()
    _show([t.model_dump(mode="json") for t in templates], output)


@app.command("show")
@command_wrapper
async def show_template(
    name: Annotated[str, typer.Argument(help="Template name")],
    output: OutputOption = None,
) -> None:
    """Show one template."""
    template = await get_template_service().get_template(name)
    data = template.model_dump(mode="json")
    if output in ("json", "yaml"):
        format_output(data, output)
        return
    _show([data], output)


@app.command("delete")
@command_wrapper
async def delete_template(
    name: Annotated[str, typer.Argument(help="Template name")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Delete a template. Tasks created from it are kept."""
    template_service = get_template_service()
    template = await template_service.get_template(name)

    if not force and not typer.confirm(f"Delete template '{template.name}'?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    await template_service.delete_template(template.name)
    format_success(f"Deleted template: {template.name}")
