"""Task management commands."""

from typing import Annotated, get_args

import typer

from homeboard_cli.exceptions import ValidationError
from homeboard_cli.models import TaskCreate, TaskPriority, TaskStatus
from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.services.context_manager import get_task_service, get_template_service
from homeboard_cli.utils import date_utils
from homeboard_cli.utils.recurrence import describe_repeat
from homeboard_cli.utils.task_helpers import (
    apply_template,
    build_repeat_options,
    parse_date_option,
    resolve_task_id,
)
from homeboard_cli.utils.typer_helpers import SuggestingGroup
from homeboard_cli.utils.ui.console import get_console
from homeboard_cli.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands", no_args_is_help=True)
console = get_console()

PRIORITIES = get_args(TaskPriority)
STATUSES = get_args(TaskStatus)

OutputOption = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Output format: pretty, table, json, yaml, quiet"),
]


def _output_format(output: str | None) -> str:
    if output:
        return output
    return get_config_service().config.output.format


def _check_choice(value: str | None, choices: tuple[str, ...], option: str) -> None:
    if value is not None and value not in choices:
        raise ValidationError(f"{option} must be one of: {', '.join(choices)}")


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[
        str | None, typer.Argument(help="Task title (defaults to the template's)")
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due date (YYYY-MM-DD); first date when repeating"),
    ] = None,
    repeat: Annotated[
        str | None, typer.Option("--repeat", "-r", help="weekly, biweekly or monthly")
    ] = None,
    days: Annotated[
        str | None, typer.Option("--days", help="Weekdays to repeat on, e.g. mon,wed,fri")
    ] = None,
    until: Annotated[
        str | None, typer.Option("--until", help="Last date to create tasks on (YYYY-MM-DD)")
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", "-p", help="low, medium (default), high or urgent")
    ] = None,
    at: Annotated[str | None, typer.Option("--time", help="Time of day (HH:MM)")] = None,
    assignee: Annotated[
        str | None, typer.Option("--assignee", "-a", help="Household member")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Details")
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", "-t", help="Start from a saved template; options override it"),
    ] = None,
    output: OutputOption = None,
) -> None:
    """Create a task, or a batch of tasks on a weekly/biweekly/monthly pattern."""
    if template is not None:
        preset = await get_template_service().get_template(template)
        options = apply_template(
            preset,
            title=title,
            description=description,
            priority=priority,
            at=at,
            assignee=assignee,
            repeat=repeat,
            days=days,
        )
        title = options["title"]
        description = options["description"]
        priority = options["priority"]
        at = options["at"]
        assignee = options["assignee"]
        repeat = options["repeat"]
        days = options["days"]

    if not title:
        raise ValidationError("A title is required (or use --template)")
    priority = priority or "medium"
    _check_choice(priority, PRIORITIES, "--priority")

    task_service = get_task_service()
    due_date = parse_date_option(due, "--due")
    repeat_options = build_repeat_options(task_service, due_date, repeat, days, until)

    task_data = TaskCreate(
        title=title,
        description=description,
        priority=priority,
        due_date=due_date,
        due_time=at,
        is_all_day=at is None,
        assignee=assignee,
    )

    tasks = await task_service.create_tasks(task_data, repeat_options)

    output_format = _output_format(output)
    if output_format in ("json", "yaml", "quiet"):
        format_output([t.model_dump(mode="json") for t in tasks], output_format)
        return

    format_success(f"Created {len(tasks)} task(s): {title}")
    if repeat_options is not None:
        summary = describe_repeat(repeat_options.weekdays, repeat_options.interval)
        console.print(
            f"[dim]{summary}, {tasks[0].due_date} → {tasks[-1].due_date}[/dim]"
        )
    format_output([t.model_dump(mode="json") for t in tasks], output_format)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: Annotated[
        str | None,
        typer.Option("--status", "-s", help="pending, in_progress, completed or all"),
    ] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p")] = None,
    assignee: Annotated[str | None, typer.Option("--assignee", "-a")] = None,
    date_from: Annotated[
        str | None, typer.Option("--from", help="Due on or after (YYYY-MM-DD)")
    ] = None,
    date_to: Annotated[
        str | None, typer.Option("--to", help="Due on or before (YYYY-MM-DD)")
    ] = None,
    search: Annotated[str | None, typer.Option("--search", help="Search titles")] = None,
    include_skipped: Annotated[
        bool, typer.Option("--all", help="Include skipped occurrences")
    ] = False,
    limit: Annotated[int | None, typer.Option("--limit")] = None,
    offset: Annotated[int | None, typer.Option("--offset")] = None,
    output: OutputOption = None,
) -> None:
    """List tasks ordered by due date."""
    _check_choice(status, STATUSES + ("all",), "--status")
    _check_choice(priority, PRIORITIES, "--priority")

    task_service = get_task_service()
    tasks = await task_service.list_tasks(
        status=status,
        priority=priority,
        assignee=assignee,
        date_from=parse_date_option(date_from, "--from"),
        date_to=parse_date_option(date_to, "--to"),
        search=search,
        include_skipped=include_skipped,
        limit=limit,
        offset=offset,
    )
    format_output([t.model_dump(mode="json") for t in tasks], _output_format(output))


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    output: OutputOption = None,
) -> None:
    """Show a task and the batch it belongs to."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)
    info = await task_service.get_batch_info(resolved_id)

    output_format = _output_format(output)
    if output_format in ("json", "yaml"):
        data = task.model_dump(mode="json")
        data["batch"] = info.model_dump()
        format_output(data, output_format)
        return

    format_output(task.model_dump(mode="json"), output_format)
    if info.is_repeating:
        format_info(
            f"Part of a batch of {info.batch_size} task(s), {info.future_count} still upcoming"
        )


@app.command("batch")
@command_wrapper
async def batch_info(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    output: OutputOption = None,
) -> None:
    """Show how many tasks were created together with this one."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    info = await task_service.get_batch_info(resolved_id)
    format_output(info.model_dump(), _output_format(output))


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
) -> None:
    """Mark a task as completed."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.complete_task(resolved_id)
    format_success(f"Completed: {task.title}")


@app.command("status")
@command_wrapper
async def set_status(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    status: Annotated[str, typer.Argument(help="pending, in_progress or completed")],
) -> None:
    """Change a task's status."""
    _check_choice(status, STATUSES, "STATUS")
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.set_status(resolved_id, status)
    format_success(f"{task.title}: {task.status}")


@app.command("skip")
@command_wrapper
async def skip_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    on: Annotated[
        str | None,
        typer.Option("--date", help="Occurrence to skip (defaults to the due date)"),
    ] = None,
) -> None:
    """Skip one occurrence of a repeating task without completing it."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    skipped = await task_service.skip_instance(resolved_id, parse_date_option(on, "--date"))
    format_success(f"Skipped {date_utils.format_date_string(skipped)}")


@app.command("update")
@command_wrapper
async def update_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    title: Annotated[str | None, typer.Option("--title")] = None,
    description: Annotated[str | None, typer.Option("--description")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p")] = None,
    due: Annotated[
        str | None, typer.Option("--due", "-d", help="New due date (single task only)")
    ] = None,
    at: Annotated[str | None, typer.Option("--time", help="Time of day (HH:MM)")] = None,
    assignee: Annotated[str | None, typer.Option("--assignee", "-a")] = None,
    future: Annotated[
        bool,
        typer.Option("--future", help="Also update later tasks of the same batch"),
    ] = False,
) -> None:
    """Update a task, or a task and all later tasks created with it."""
    _check_choice(priority, PRIORITIES, "--priority")

    fields = {
        key: value
        for key, value in {
            "title": title,
            "description": description,
            "priority": priority,
            "due_time": at,
            "assignee": assignee,
        }.items()
        if value is not None
    }
    if at is not None:
        fields["is_all_day"] = False

    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)

    if future:
        if due is not None:
            raise ValidationError("--due cannot be combined with --future")
        count = await task_service.update_future(resolved_id, **fields)
        format_success(f"Updated {count} task(s)")
        return

    if due is not None:
        fields["due_date"] = parse_date_option(due, "--due")
    if not fields:
        raise ValidationError("Nothing to update")
    task = await task_service.update_task(resolved_id, **fields)
    format_success(f"Updated: {task.title}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique suffix")],
    future: Annotated[
        bool,
        typer.Option("--future", help="Also delete later tasks of the same batch"),
    ] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Delete a task, or a task and all later tasks created with it."""
    task_service = get_task_service()
    resolved_id = await resolve_task_id(task_service, task_id)
    task = await task_service.get_task(resolved_id)

    if not force:
        scope = "this and all future occurrences of" if future else "task"
        if not typer.confirm(f"Delete {scope} '{task.title}'?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

    if future:
        count = await task_service.delete_future(resolved_id)
        format_success(f"Deleted {count} task(s)")
    else:
        await task_service.delete_task(resolved_id)
        format_success(f"Deleted: {task.title}")
