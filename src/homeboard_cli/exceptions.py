"""Exceptions raised by the Homeboard CLI.

Each exception carries the exit code the command layer terminates with.
"""

from homeboard_cli.utils.exit_codes import (
    ERROR_CONFIG,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationError(AppError, ValueError):
    """User input was rejected (bad date, bad repeat settings, ...)."""

    def __init__(self, message: str):
        super().__init__(message, ERROR_INVALID_ARGS)


class TaskNotFoundError(AppError, LookupError):
    """No task matched the given ID."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}", ERROR_NOT_FOUND)
        self.task_id = task_id


class ConfigError(AppError):
    """The configuration file could not be loaded or saved."""

    def __init__(self, message: str):
        super().__init__(message, ERROR_CONFIG)


class StorageError(AppError):
    """The local database could not be opened or migrated."""

    def __init__(self, message: str):
        super().__init__(message, ERROR_STORAGE)


class TemplateNotFoundError(AppError, LookupError):
    """No template has the given name."""

    def __init__(self, name: str):
        super().__init__(f"Template not found: {name}", ERROR_NOT_FOUND)
        self.name = name
