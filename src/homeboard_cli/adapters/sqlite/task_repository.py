"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from homeboard_cli.adapters.sqlite.connection import get_connection
from homeboard_cli.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    now_iso,
    row_to_dict,
)
from homeboard_cli.exceptions import TaskNotFoundError
from homeboard_cli.models import Task, TaskCreate, TaskFilters, TaskStatus, TaskUpdate
from homeboard_cli.repositories import TaskRepository
from homeboard_cli.utils.logger import get_logger

logger = get_logger("adapters.sqlite.task_repository")

_SKIPPED_EXPR = """
    EXISTS (
        SELECT 1 FROM task_skipped_instances s
        WHERE s.task_id = t.id AND s.skipped_date = t.due_date
    )
"""

_SELECT_TASKS = f"SELECT t.*, {_SKIPPED_EXPR} AS skipped FROM tasks t"

_ORDER_BY = " ORDER BY t.due_date IS NULL, t.due_date ASC, t.due_time ASC, t.created_at ASC"


def _to_db_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Already-open connection to use instead of *db_path*
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _fetch(self, task_id: str) -> Task:
        cursor = self.connection.execute(f"{_SELECT_TASKS} WHERE t.id = ?", (task_id,))
        row = cursor.fetchone()
        if not row:
            raise TaskNotFoundError(task_id)
        return Task(**row_to_dict(row))

    def _fetch_many(self, task_ids: list[str]) -> list[Task]:
        if not task_ids:
            return []
        cursor = self.connection.execute(
            f"{_SELECT_TASKS} WHERE t.id IN ({_placeholders(len(task_ids))})",
            task_ids,
        )
        by_id = {row["id"]: Task(**row_to_dict(row)) for row in cursor.fetchall()}
        return [by_id[task_id] for task_id in task_ids if task_id in by_id]

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List all tasks with filtering."""
        query = f"{_SELECT_TASKS} WHERE 1=1"
        params: list[Any] = []

        if filters.status and filters.status != "all":
            query += " AND t.status = ?"
            params.append(filters.status)

        if filters.priority:
            query += " AND t.priority = ?"
            params.append(filters.priority)

        if filters.assignee:
            query += " AND t.assignee = ?"
            params.append(filters.assignee)

        if filters.date_from:
            query += " AND t.due_date >= ?"
            params.append(filters.date_from.isoformat())

        if filters.date_to:
            query += " AND t.due_date <= ?"
            params.append(filters.date_to.isoformat())

        if filters.search:
            query += " AND (t.title LIKE ? OR t.description LIKE ?)"
            search_term = f"%{filters.search}%"
            params.extend([search_term, search_term])

        if not filters.include_skipped:
            query += f" AND NOT {_SKIPPED_EXPR}"

        query += _ORDER_BY

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)
            if filters.offset is not None:
                query += " OFFSET ?"
                params.append(filters.offset)

        cursor = self.connection.execute(query, params)
        return [Task(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return self._fetch(task_id)

    async def add_many(
        self,
        tasks: list[TaskCreate],
        *,
        created_by: str,
        created_at: datetime,
    ) -> list[Task]:
        """Insert a whole batch in one transaction."""
        batch_timestamp = created_at.isoformat()
        task_ids = []
        rows = []
        for task_data in tasks:
            task_id = generate_uuid()
            task_ids.append(task_id)
            rows.append(
                (
                    task_id,
                    task_data.title,
                    task_data.description,
                    task_data.priority,
                    _to_db_value(task_data.due_date),
                    task_data.due_time,
                    task_data.is_all_day,
                    task_data.assignee,
                    created_by,
                    batch_timestamp,
                    batch_timestamp,
                )
            )

        with self.connection:
            self.connection.executemany(
                """
                INSERT INTO tasks (
                    id, title, description, priority, due_date, due_time,
                    is_all_day, assignee, created_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )

        logger.debug("inserted %d task(s) for batch %s", len(rows), batch_timestamp)
        return self._fetch_many(task_ids)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        # Raises when missing
        self._fetch(task_id)
        await self.update_many([task_id], updates)
        return self._fetch(task_id)

    async def update_many(self, task_ids: list[str], updates: TaskUpdate) -> int:
        """Apply one update to several tasks."""
        fields = {
            key: _to_db_value(value)
            for key, value in updates.model_dump(exclude_unset=True).items()
        }
        if not task_ids or not fields:
            return 0

        fields["updated_at"] = now_iso()
        set_clause, params = build_update_clause(fields)

        with self.connection:
            cursor = self.connection.execute(
                f"UPDATE tasks SET {set_clause} WHERE id IN ({_placeholders(len(task_ids))})",
                params + list(task_ids),
            )
        return cursor.rowcount

    async def delete(self, task_id: str) -> bool:
        """Delete a task."""
        deleted = await self.delete_many([task_id])
        if not deleted:
            raise TaskNotFoundError(task_id)
        return True

    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete several tasks (skipped instances cascade)."""
        if not task_ids:
            return 0
        with self.connection:
            cursor = self.connection.execute(
                f"DELETE FROM tasks WHERE id IN ({_placeholders(len(task_ids))})",
                list(task_ids),
            )
        return cursor.rowcount

    async def list_batch(self, task: Task) -> list[Task]:
        """List every task created in the same batch as *task*."""
        cursor = self.connection.execute(
            f"""
            {_SELECT_TASKS}
            WHERE t.title = ? AND t.created_by = ? AND substr(t.created_at, 1, 10) = ?
            {_ORDER_BY}
            """,
            (task.title, task.created_by, task.batch_date.isoformat()),
        )
        return [Task(**row_to_dict(row)) for row in cursor.fetchall()]

    async def set_status(self, task_id: str, status: TaskStatus, user: str) -> Task:
        """Change a task's status, recording who completed it."""
        self._fetch(task_id)

        now = now_iso()
        if status == "completed":
            completed_by, completed_at = user, now
        else:
            completed_by, completed_at = None, None

        with self.connection:
            self.connection.execute(
                """
                UPDATE tasks
                SET status = ?, completed_by = ?, completed_at = ?, updated_at = ?
                WHERE id = ?
                """,
                (status, completed_by, completed_at, now, task_id),
            )
        return self._fetch(task_id)

    async def skip_instance(self, task_id: str, skip_date: date, skipped_by: str) -> None:
        """Record a skipped occurrence, replacing an earlier skip of the same date."""
        self._fetch(task_id)

        with self.connection:
            self.connection.execute(
                """
                INSERT INTO task_skipped_instances (id, task_id, skipped_date, skipped_by, skipped_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (task_id, skipped_date)
                DO UPDATE SET skipped_by = excluded.skipped_by, skipped_at = excluded.skipped_at
                """,
                (
                    generate_uuid(),
                    task_id,
                    skip_date.isoformat(),
                    skipped_by,
                    datetime.now(UTC).isoformat(),
                ),
            )
