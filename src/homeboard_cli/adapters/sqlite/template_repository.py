"""SQLite implementation of TemplateRepository."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from homeboard_cli.adapters.sqlite.connection import get_connection
from homeboard_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from homeboard_cli.exceptions import TemplateNotFoundError, ValidationError
from homeboard_cli.models import TaskTemplate, TaskTemplateCreate
from homeboard_cli.repositories import TemplateRepository
from homeboard_cli.utils.logger import get_logger

logger = get_logger("adapters.sqlite.template_repository")


class SqliteTemplateRepository(TemplateRepository):
    """SQLite implementation of template repository."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self) -> list[TaskTemplate]:
        """List templates ordered by name."""
        cursor = self.connection.execute(
            "SELECT * FROM task_templates ORDER BY name COLLATE NOCASE"
        )
        return [TaskTemplate(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get_by_name(self, name: str) -> TaskTemplate:
        """Get a template by name (the column compares without case)."""
        cursor = self.connection.execute(
            "SELECT * FROM task_templates WHERE name = ?", (name,)
        )
        row = cursor.fetchone()
        if not row:
            raise TemplateNotFoundError(name)
        return TaskTemplate(**row_to_dict(row))

    async def add(self, template: TaskTemplateCreate, *, created_by: str) -> TaskTemplate:
        """Insert a template."""
        now = now_iso()
        try:
            with self.connection:
                self.connection.execute(
                    """
                    INSERT INTO task_templates (
                        id, name, title, description, priority, default_time,
                        repeat_interval, repeat_days, assignee,
                        created_by, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        generate_uuid(),
                        template.name,
                        template.title,
                        template.description,
                        template.priority,
                        template.default_time,
                        template.repeat_interval,
                        template.repeat_days_text(),
                        template.assignee,
                        created_by,
                        now,
                        now,
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise ValidationError(f"Template already exists: {template.name}") from e

        logger.debug("inserted template %s", template.name)
        return await self.get_by_name(template.name)

    async def delete(self, name: str) -> bool:
        """Delete a template by name."""
        with self.connection:
            cursor = self.connection.execute(
                "DELETE FROM task_templates WHERE name = ?", (name,)
            )
        if not cursor.rowcount:
            raise TemplateNotFoundError(name)
        return True
