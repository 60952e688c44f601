"""Repository abstraction layer for Homeboard CLI.

Keeps the services independent of the storage mechanism.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from homeboard_cli.models import (
    Task,
    TaskCreate,
    TaskFilters,
    TaskStatus,
    TaskTemplate,
    TaskTemplateCreate,
    TaskUpdate,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks matching the filters, ordered by due date."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add_many(
        self,
        tasks: list[TaskCreate],
        *,
        created_by: str,
        created_at: datetime,
    ) -> list[Task]:
        """Store every task of one batch.

        All rows share *created_at*, which together with the title and the
        creator forms the batch key.

        Args:
            tasks: Tasks to create, one per generated date
            created_by: Name of the creating user
            created_at: Batch timestamp

        Returns:
            Created tasks, in the order given
        """
        raise NotImplementedError(
            "TaskRepository.add_many() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update the fields explicitly set on *updates*.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def update_many(self, task_ids: list[str], updates: TaskUpdate) -> int:
        """Apply the same update to several tasks.

        Returns:
            Number of tasks updated
        """
        raise NotImplementedError(
            "TaskRepository.update_many() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_many(self, task_ids: list[str]) -> int:
        """Delete several tasks.

        Returns:
            Number of tasks deleted
        """
        raise NotImplementedError(
            "TaskRepository.delete_many() must be implemented by adapter"
        )

    @abstractmethod
    async def list_batch(self, task: Task) -> list[Task]:
        """List every task sharing *task*'s batch key, including itself."""
        raise NotImplementedError(
            "TaskRepository.list_batch() must be implemented by adapter"
        )

    @abstractmethod
    async def set_status(self, task_id: str, status: TaskStatus, user: str) -> Task:
        """Change a task's status.

        Completing records *user* and the completion time; any other status
        clears them.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.set_status() must be implemented by adapter"
        )

    @abstractmethod
    async def skip_instance(self, task_id: str, skip_date: date, skipped_by: str) -> None:
        """Mark one occurrence of a task as skipped.

        Skipping the same task and date twice is not an error.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.skip_instance() must be implemented by adapter"
        )


class TemplateRepository(ABC):
    """Abstract base class for task template persistence."""

    @abstractmethod
    async def list_all(self) -> list[TaskTemplate]:
        """List templates ordered by name."""
        raise NotImplementedError(
            "TemplateRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get_by_name(self, name: str) -> TaskTemplate:
        """Get a template by name, ignoring case.

        Raises:
            TemplateNotFoundError: If no template has that name
        """
        raise NotImplementedError(
            "TemplateRepository.get_by_name() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, template: TaskTemplateCreate, *, created_by: str) -> TaskTemplate:
        """Store a new template.

        Raises:
            ValidationError: If a template with the same name exists
        """
        raise NotImplementedError("TemplateRepository.add() must be implemented by adapter")

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Delete a template by name.

        Raises:
            TemplateNotFoundError: If no template has that name
        """
        raise NotImplementedError(
            "TemplateRepository.delete() must be implemented by adapter"
        )
