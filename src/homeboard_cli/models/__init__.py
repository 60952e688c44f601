"""Homeboard CLI domain models.

Pydantic models for tasks, templates, repeat patterns and configuration, used for
validation and serialization throughout the application.
"""

from .config_models import AppConfig, DatabaseConfig, OutputConfig, ScheduleConfig
from .recurrence import (
    REPEAT_INTERVALS,
    GenerationRequest,
    RepeatInterval,
    RepeatOptions,
    Weekday,
)
from .task import (
    BatchInfo,
    Task,
    TaskCreate,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from .template import TaskTemplate, TaskTemplateCreate

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskPriority",
    "TaskStatus",
    "BatchInfo",
    # Template models
    "TaskTemplate",
    "TaskTemplateCreate",
    # Recurrence models
    "GenerationRequest",
    "RepeatOptions",
    "RepeatInterval",
    "REPEAT_INTERVALS",
    "Weekday",
    # Config models
    "AppConfig",
    "DatabaseConfig",
    "ScheduleConfig",
    "OutputConfig",
]
