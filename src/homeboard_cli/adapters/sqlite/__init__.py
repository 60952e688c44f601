"""SQLite adapter module - Local database storage implementation."""

from homeboard_cli.adapters.sqlite.connection import DatabaseConnection, get_connection
from homeboard_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from homeboard_cli.adapters.sqlite.template_repository import SqliteTemplateRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "SqliteTemplateRepository",
    "get_connection",
]
