"""Recurrence data models."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

RepeatInterval = Literal["weekly", "biweekly", "monthly"]

REPEAT_INTERVALS: tuple[str, ...] = get_args(RepeatInterval)

# Sunday=0 ... Saturday=6
Weekday = Annotated[int, Field(ge=0, le=6)]


class GenerationRequest(BaseModel):
    """Input for expanding a weekday/interval pattern into concrete dates.

    Attributes:
        selected_weekdays: Weekdays to create tasks on (0=Sunday ... 6=Saturday)
        repeat_interval: Repeat interval, or None for a single occurrence
        start: First possible date (inclusive)
        end: Last possible date (inclusive)
    """

    model_config = ConfigDict(frozen=True)

    selected_weekdays: frozenset[Weekday] = Field(default_factory=frozenset)
    repeat_interval: RepeatInterval | None = None
    start: date
    end: date


class RepeatOptions(BaseModel):
    """Repeat settings collected from the user when creating a task.

    The start of the range is the task's due date, so it is not part of
    these options.

    Attributes:
        weekdays: Weekdays to create tasks on (0=Sunday ... 6=Saturday)
        interval: Repeat interval, or None for a single occurrence
        end_date: Last date a task may be created on
    """

    weekdays: frozenset[Weekday]
    interval: RepeatInterval | None = None
    end_date: date
