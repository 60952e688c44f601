"""Task data models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TaskPriority = Literal["low", "medium", "high", "urgent"]
TaskStatus = Literal["pending", "in_progress", "completed"]


def normalize_time(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%H:%M").strftime("%H:%M")
    except ValueError as e:
        raise ValueError(f"Invalid time '{value}': expected HH:MM") from e


class Task(BaseModel):
    """Task model representing one stored task row.

    A repeating task is stored as one row per generated date. Rows created
    by the same request share a batch key: title, creator and the date part
    of ``created_at``.

    Attributes:
        id: Unique identifier for the task
        title: Task title
        description: Optional detailed description
        priority: Priority level
        status: Workflow status
        due_date: Calendar date the task is due on
        due_time: Optional time of day (HH:MM)
        is_all_day: Whether the task has no specific time
        assignee: Household member the task is assigned to
        created_by: Name of the user who created the batch
        created_at: Batch creation timestamp
        updated_at: Last update timestamp
        completed_by: Name of the user who completed the task
        completed_at: Completion timestamp
        skipped: Whether this occurrence was skipped
    """

    id: str
    title: str
    description: str | None = None
    priority: TaskPriority = "medium"
    status: TaskStatus = "pending"
    due_date: date | None = None
    due_time: str | None = None
    is_all_day: bool = True
    assignee: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    completed_by: str | None = None
    completed_at: datetime | None = None
    skipped: bool = False

    @property
    def batch_date(self) -> date:
        """Date part of the batch creation timestamp."""
        return self.created_at.date()


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        description: Optional detailed description
        priority: Priority level
        due_date: Due date; for repeating tasks, the first possible date
        due_time: Optional time of day (HH:MM)
        is_all_day: Whether the task has no specific time
        assignee: Household member the task is assigned to
    """

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    priority: TaskPriority = "medium"
    due_date: date | None = None
    due_time: str | None = None
    is_all_day: bool = True
    assignee: str | None = None

    normalize_due_time = field_validator("due_time")(normalize_time)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    priority: TaskPriority | None = None
    due_date: date | None = None
    due_time: str | None = None
    is_all_day: bool | None = None
    assignee: str | None = None

    normalize_due_time = field_validator("due_time")(normalize_time)


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        status: Filter by status ("all" disables the filter)
        priority: Filter by priority
        assignee: Filter by assignee name
        date_from: Only tasks due on or after this date
        date_to: Only tasks due on or before this date
        search: Text search in title and description
        include_skipped: Include occurrences that were skipped
        limit: Maximum number of results
        offset: Pagination offset
    """

    status: TaskStatus | Literal["all"] | None = None
    priority: TaskPriority | None = None
    assignee: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    search: str | None = None
    include_skipped: bool = False
    limit: int | None = None
    offset: int | None = None


class BatchInfo(BaseModel):
    """Summary of the batch a task was created in.

    Attributes:
        is_repeating: Whether the batch holds more than one task
        batch_size: Number of tasks in the batch
        future_count: Tasks due today or later that are not completed
    """

    is_repeating: bool = False
    batch_size: int = 0
    future_count: int = 0
