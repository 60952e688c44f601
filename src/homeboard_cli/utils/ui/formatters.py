"""Output formatters for different formats."""

import json
from datetime import date
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from homeboard_cli.utils import date_utils
from homeboard_cli.utils.recurrence import describe_repeat
from homeboard_cli.utils.ui.console import get_console

console = get_console()

PRIORITY_ORDER = ["urgent", "high", "medium", "low"]

PRIORITY_COLORS = {
    "urgent": "bold red",
    "high": "yellow",
    "medium": "cyan",
    "low": "dim",
}

STATUS_ICONS = {
    "pending": "○",
    "in_progress": "◐",
    "completed": "✓",
    "skipped": "↷",
}

TASK_TABLE_COLUMNS = ["id", "title", "due_date", "due_time", "priority", "status", "assignee"]


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format a task or list of tasks as a table."""
    items = data if isinstance(data, list) else [data]
    if not items:
        console.print("[yellow]No tasks found[/yellow]")
        return

    if not isinstance(items[0], dict):
        for item in items:
            console.print(item)
        return

    columns = [c for c in TASK_TABLE_COLUMNS if c in items[0]] or list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        row = []
        for col in columns:
            value = item.get(col)
            if isinstance(value, bool):
                value = "✓" if value else "✗"
            elif value is None:
                value = "-"
            else:
                value = str(value)
            row.append(value)
        table.add_row(*row)

    console.print(table)


def format_pretty(data: Any) -> None:
    """Format data in a human-friendly layout."""
    if isinstance(data, list):
        format_tasks_pretty(data)
    elif isinstance(data, dict) and "title" in data:
        format_task_item(data)
    elif isinstance(data, dict):
        for key, value in data.items():
            formatted_key = key.replace("_", " ").title()
            console.print(f"[cyan]{formatted_key}:[/cyan] {value}")
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks grouped by priority, overdue tasks last."""
    open_tasks = [t for t in tasks if t.get("status") != "completed"]

    header = Text()
    header.append("Tasks ", style="bold cyan")
    header.append(f"({len(open_tasks)} open, {len(tasks) - len(open_tasks)} done)", style="dim")
    console.print(header)
    console.print()

    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    suffix_map = calculate_unique_suffixes([t["id"] for t in tasks if t.get("id")])

    overdue_tasks = []
    by_priority: dict[str, list[dict]] = {p: [] for p in PRIORITY_ORDER}
    for task in tasks:
        if task.get("status") != "completed" and is_overdue(task.get("due_date")):
            overdue_tasks.append(task)
        else:
            by_priority.setdefault(task.get("priority", "medium"), []).append(task)

    for priority in PRIORITY_ORDER:
        priority_tasks = by_priority[priority]
        if not priority_tasks:
            continue
        console.print(priority.upper(), style=PRIORITY_COLORS[priority])
        for task in priority_tasks:
            format_task_item(task, indent="  ", suffix_map=suffix_map)
        console.print()

    if overdue_tasks:
        console.print(f"OVERDUE ({len(overdue_tasks)})", style="bold red")
        for task in overdue_tasks:
            format_task_item(task, indent="  ", suffix_map=suffix_map)
        console.print()


def format_task_item(
    task: dict,
    indent: str = "",
    suffix_map: dict[str, int] | None = None,
) -> None:
    """Format a single task item with a metadata line."""
    status = task.get("status", "pending")
    is_completed = status == "completed"
    icon = STATUS_ICONS["skipped"] if task.get("skipped") else STATUS_ICONS.get(status, "○")

    line = Text(f"{indent}{icon} ")
    line.append(task.get("title", "Untitled"), style="dim" if is_completed else "")
    console.print(line)

    meta: list[tuple[str, str]] = []
    if task.get("due_date"):
        due_str = format_due_date(task["due_date"], task.get("due_time"))
        style = "bold red" if is_overdue(task["due_date"]) and not is_completed else "cyan"
        meta.append((due_str, style))
    if task.get("assignee"):
        meta.append((f"@{task['assignee']}", "yellow"))
    if is_completed and task.get("completed_by"):
        meta.append((f"done by {task['completed_by']}", "dim green"))
    if task.get("skipped"):
        meta.append(("skipped", "magenta"))
    if task.get("id"):
        task_id = task["id"]
        length = suffix_map.get(task_id, 6) if suffix_map else 6
        meta.append((f"#{task_id[-length:]}", "dim"))

    if meta:
        meta_line = Text()
        meta_line.append(f"{indent}   └─ ", style="dim")
        for i, (text, style) in enumerate(meta):
            if i > 0:
                meta_line.append(" • ", style="dim")
            meta_line.append(text, style=style)
        console.print(meta_line)

    if task.get("description") and suffix_map is None:
        console.print(f"{indent}   [dim]{task['description']}[/dim]")


def format_dates(dates: list[date], description: str = "") -> None:
    """Show a list of generated dates."""
    if description:
        console.print(f"[bold]{description}[/bold]")
    if not dates:
        console.print("[yellow]No matching dates[/yellow]")
        return
    for value in dates:
        console.print(f"  {format_due_date(value.isoformat())}")
    console.print(f"[dim]{len(dates)} date(s)[/dim]")


def format_templates(templates: list[dict]) -> None:
    """Show task templates as a table, one row per template."""
    if not templates:
        console.print("[yellow]No templates found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Name", "Title", "Priority", "Time", "Repeat", "Assignee"):
        table.add_column(column)

    for template in templates:
        repeat = describe_repeat(template["repeat_days"], template["repeat_interval"])
        priority = template["priority"]
        table.add_row(
            template["name"],
            template["title"],
            Text(priority, style=PRIORITY_COLORS.get(priority, "")),
            template["default_time"] or "all day",
            repeat.removeprefix("Repeats ") or "-",
            template["assignee"] or "-",
        )

    console.print(table)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
            elif not isinstance(item, dict):
                print(item)
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Helper Functions
# ============================================================================


def is_overdue(due_date: str | None) -> bool:
    """Check if a due date (YYYY-MM-DD) is before today."""
    if not due_date:
        return False
    try:
        return date_utils.parse_local_date(due_date) < date_utils.today()
    except ValueError:
        return False


def format_due_date(due_date: str, due_time: str | None = None) -> str:
    """Format a due date as ``Mon 04/03`` (``Mon 04/03/2023`` outside this year)."""
    try:
        value = date_utils.parse_local_date(due_date)
    except ValueError:
        return due_date

    text = value.strftime("%a %d/%m")
    if value.year != date_utils.today().year:
        text = value.strftime("%a %d/%m/%Y")
    if due_time:
        text = f"{text} {due_time}"
    return text
