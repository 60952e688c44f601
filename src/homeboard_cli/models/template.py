"""Task template models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .recurrence import RepeatInterval, Weekday
from .task import TaskPriority, normalize_time


def _split_days(value: Any) -> Any:
    # Stored as "1,5"
    if isinstance(value, str):
        return [int(part) for part in value.split(",") if part.strip()]
    return value


class TaskTemplate(BaseModel):
    """A named preset for creating tasks.

    Attributes:
        id: Unique identifier
        name: Name used to pick the template (unique, case-insensitive)
        title: Title given to tasks created from the template
        description: Default description
        priority: Default priority
        default_time: Default time of day (HH:MM), None for all-day tasks
        repeat_interval: Default repeat interval, None for one-off tasks
        repeat_days: Default weekdays (0=Sunday ... 6=Saturday)
        assignee: Default household member
        created_by: Name of the user who created the template
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    name: str
    title: str
    description: str | None = None
    priority: TaskPriority = "medium"
    default_time: str | None = None
    repeat_interval: RepeatInterval | None = None
    repeat_days: list[Weekday] = Field(default_factory=list)
    assignee: str | None = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    split_repeat_days = field_validator("repeat_days", mode="before")(_split_days)

    @property
    def is_recurring(self) -> bool:
        return self.repeat_interval is not None


class TaskTemplateCreate(BaseModel):
    """Model for creating a template.

    Repeat days only make sense together with a repeat interval.
    """

    name: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    priority: TaskPriority = "medium"
    default_time: str | None = None
    repeat_interval: RepeatInterval | None = None
    repeat_days: frozenset[Weekday] = Field(default_factory=frozenset)
    assignee: str | None = None

    normalize_default_time = field_validator("default_time")(normalize_time)

    @model_validator(mode="after")
    def check_days_need_interval(self) -> TaskTemplateCreate:
        if self.repeat_days and self.repeat_interval is None:
            raise ValueError("repeat days need a repeat interval")
        return self

    def repeat_days_text(self) -> str:
        """Weekdays in storage form, e.g. "1,5"."""
        return ",".join(str(day) for day in sorted(self.repeat_days))
