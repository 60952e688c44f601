"""Task helper utilities shared by the task and preview commands."""

from datetime import date
from typing import Any

from homeboard_cli.exceptions import TaskNotFoundError, ValidationError
from homeboard_cli.models import REPEAT_INTERVALS, RepeatOptions, TaskTemplate
from homeboard_cli.services.task_service import TaskService
from homeboard_cli.utils import date_utils
from homeboard_cli.utils.recurrence import parse_weekdays


def parse_date_option(value: str | None, option: str) -> date | None:
    """Parse a YYYY-MM-DD option value, naming the option on failure."""
    if value is None:
        return None
    try:
        return date_utils.parse_local_date(value)
    except ValueError as e:
        raise ValidationError(f"{option}: {e}") from e


def build_repeat_options(
    task_service: TaskService,
    start: date | None,
    repeat: str | None,
    days: str | None,
    until: str | None,
    *,
    single_allowed: bool = False,
) -> RepeatOptions | None:
    """Turn the ``--repeat``, ``--days`` and ``--until`` values into RepeatOptions.

    Missing weekdays and end date are filled in by the task service. Without
    ``--repeat`` the result is None, unless *single_allowed* is set, in which
    case the options describe a single occurrence on *start*.

    Raises:
        ValidationError: On an unknown interval, unparseable weekdays or
            dates, repeat settings without a start date, or ``--days`` /
            ``--until`` without ``--repeat`` where that is not allowed
    """
    if repeat is None and not single_allowed:
        if days or until:
            raise ValidationError("--days and --until require --repeat")
        return None

    if repeat is not None and repeat not in REPEAT_INTERVALS:
        raise ValidationError(f"--repeat must be one of: {', '.join(REPEAT_INTERVALS)}")
    if start is None:
        raise ValidationError("A due date (--due) is required for repeating tasks")

    try:
        weekdays = parse_weekdays(days) if days else None
    except ValueError as e:
        raise ValidationError(f"--days: {e}") from e
    if days and not weekdays:
        raise ValidationError("--days: select at least one weekday")

    return task_service.repeat_options(
        start, repeat, weekdays, parse_date_option(until, "--until")
    )


def apply_template(template: TaskTemplate, **options: Any) -> dict[str, Any]:
    """Fill every option left unset (None) from *template*.

    Option names are those of ``tasks add``: title, description, priority,
    at, assignee, repeat and days. Values given explicitly always win.
    """
    defaults = {
        "title": template.title,
        "description": template.description,
        "priority": template.priority,
        "at": template.default_time,
        "assignee": template.assignee,
        "repeat": template.repeat_interval,
        "days": ",".join(str(day) for day in template.repeat_days) or None,
    }
    return {
        key: defaults.get(key) if value is None else value
        for key, value in options.items()
    }


async def resolve_task_id(task_service: TaskService, task_id_or_suffix: str) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    Task lists show the shortest unique suffix of each ID; any suffix that
    matches exactly one task is accepted.

    Raises:
        TaskNotFoundError: If no task matches
        ValidationError: If the suffix matches more than one task
    """
    try:
        await task_service.get_task(task_id_or_suffix)
        return task_id_or_suffix
    except TaskNotFoundError:
        pass

    tasks = await task_service.list_tasks(status="all", include_skipped=True)
    matching = [task for task in tasks if task.id.endswith(task_id_or_suffix)]

    if not matching:
        raise TaskNotFoundError(task_id_or_suffix)

    if len(matching) > 1:
        shown = ", ".join(
            f"{task.id[-8:]} ({task.title}, {task.due_date or 'no date'})"
            for task in matching[:5]
        )
        raise ValidationError(
            f"Ambiguous task ID '{task_id_or_suffix}' matches {len(matching)} tasks: {shown}"
        )

    return matching[0].id
