"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. It turns a task
plus optional repeat settings into one stored row per generated date, and
implements the batch operations ("this and all future occurrences") on top
of the batch key: title, creator and the date the batch was created.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from homeboard_cli.exceptions import TaskNotFoundError, ValidationError
from homeboard_cli.models import (
    BatchInfo,
    GenerationRequest,
    RepeatInterval,
    RepeatOptions,
    Task,
    TaskCreate,
    TaskFilters,
    TaskStatus,
    TaskUpdate,
)
from homeboard_cli.repositories import TaskRepository
from homeboard_cli.utils import date_utils
from homeboard_cli.utils.logger import get_logger
from homeboard_cli.utils.recurrence import generate_task_dates

logger = get_logger("services.task_service")

NO_DATES_MESSAGE = "No task dates generated - please check your repeat settings"


class TaskService:
    """Service for task business logic.

    Args:
        task_repository: TaskRepository implementation for data access
        user: Name recorded as creator, completer and skipper
        horizon_days: How far ahead repeating tasks run when no end date is given
        clock: Returns the current timestamp; batch timestamps come from it
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        user: str,
        horizon_days: int = 90,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = task_repository
        self.user = user
        self.horizon_days = horizon_days
        self._clock = clock or (lambda: datetime.now(UTC))

    def repeat_options(
        self,
        start: date,
        interval: RepeatInterval | None,
        weekdays: frozenset[int] | None = None,
        end_date: date | None = None,
    ) -> RepeatOptions:
        """Build repeat options, filling in what the user left out.

        Without weekdays the start date's weekday is used; without an end
        date the range runs ``horizon_days`` past the start.
        """
        return RepeatOptions(
            weekdays=weekdays or frozenset({date_utils.weekday_index(start)}),
            interval=interval,
            end_date=end_date or start + timedelta(days=self.horizon_days),
        )

    def build_generation_request(
        self, repeat: RepeatOptions, start: date
    ) -> GenerationRequest:
        """Combine repeat options with the first possible date."""
        return GenerationRequest(
            selected_weekdays=repeat.weekdays,
            repeat_interval=repeat.interval,
            start=start,
            end=repeat.end_date,
        )

    def preview_dates(self, repeat: RepeatOptions, start: date) -> list[date]:
        """Dates a repeating task would be created on, without storing anything."""
        return generate_task_dates(self.build_generation_request(repeat, start))

    async def create_tasks(
        self, task: TaskCreate, repeat: RepeatOptions | None = None
    ) -> list[Task]:
        """Create a task, or one task per generated date when repeating.

        Args:
            task: Task details; for repeating tasks the due date is the start
            repeat: Optional repeat settings

        Returns:
            The created tasks in date order

        Raises:
            ValidationError: If repeat settings are given without a due date,
                or they produce no dates
        """
        if repeat is None:
            due_dates: list[date | None] = [task.due_date]
        else:
            if task.due_date is None:
                raise ValidationError("A due date is required for repeating tasks")
            due_dates = list(self.preview_dates(repeat, task.due_date))
            if not due_dates:
                raise ValidationError(NO_DATES_MESSAGE)

        # Every row of the batch shares one timestamp
        created_at = self._clock()
        rows = [task.model_copy(update={"due_date": d}) for d in due_dates]
        created = await self.repository.add_many(
            rows, created_by=self.user, created_at=created_at
        )
        logger.info(
            "created %d task(s) '%s' in batch %s",
            len(created),
            task.title,
            created_at.isoformat(),
        )
        return created

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        assignee: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
        include_skipped: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Task]:
        """List tasks with filtering and pagination."""
        filters = TaskFilters(
            status=status,
            priority=priority,
            assignee=assignee,
            date_from=date_from,
            date_to=date_to,
            search=search,
            include_skipped=include_skipped,
            limit=limit,
            offset=offset,
        )
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.repository.get(task_id)

    async def update_task(self, task_id: str, **fields) -> Task:
        """Update a single task with the given fields."""
        return await self.repository.update(task_id, TaskUpdate(**fields))

    async def delete_task(self, task_id: str) -> bool:
        """Delete a single task."""
        return await self.repository.delete(task_id)

    async def complete_task(self, task_id: str) -> Task:
        """Mark a task as completed by the current user."""
        return await self.set_status(task_id, "completed")

    async def set_status(self, task_id: str, status: TaskStatus) -> Task:
        """Change a task's status."""
        task = await self.repository.set_status(task_id, status, self.user)
        logger.info("task %s status -> %s", task_id, status)
        return task

    async def skip_instance(self, task_id: str, skip_date: date | None = None) -> date:
        """Skip one occurrence of a task.

        Args:
            task_id: Task to skip
            skip_date: Occurrence date; defaults to the task's due date

        Returns:
            The date that was skipped

        Raises:
            ValidationError: If no date is given and the task has no due date
        """
        if skip_date is None:
            task = await self.repository.get(task_id)
            if task.due_date is None:
                raise ValidationError("Task has no due date; pass the date to skip")
            skip_date = task.due_date

        await self.repository.skip_instance(task_id, skip_date, self.user)
        logger.info("task %s skipped on %s", task_id, skip_date.isoformat())
        return skip_date

    async def get_batch_info(self, task_id: str) -> BatchInfo:
        """Describe the batch a task belongs to.

        An unknown task yields an empty BatchInfo rather than an error.
        """
        try:
            task = await self.repository.get(task_id)
        except TaskNotFoundError:
            return BatchInfo()

        batch = await self.repository.list_batch(task)
        today = date_utils.today()
        future_count = sum(
            1
            for t in batch
            if t.due_date is not None and t.due_date >= today and t.status != "completed"
        )
        return BatchInfo(
            is_repeating=len(batch) > 1,
            batch_size=len(batch),
            future_count=future_count,
        )

    async def _future_siblings(self, task_id: str) -> list[Task]:
        task = await self.repository.get(task_id)
        cutoff = task.due_date or date_utils.today()
        batch = await self.repository.list_batch(task)
        return [
            t
            for t in batch
            if t.id == task.id or (t.due_date is not None and t.due_date >= cutoff)
        ]

    async def update_future(self, task_id: str, **fields) -> int:
        """Update a task and every later task of its batch.

        Due dates are never changed, so the schedule of the batch is kept.

        Returns:
            Number of tasks updated
        """
        fields.pop("due_date", None)
        updates = TaskUpdate(**fields)
        if not updates.model_fields_set:
            raise ValidationError("Nothing to update")

        targets = await self._future_siblings(task_id)
        updated = await self.repository.update_many([t.id for t in targets], updates)
        logger.info("updated %d task(s) from batch of %s", updated, task_id)
        return updated

    async def delete_future(self, task_id: str) -> int:
        """Delete a task and every later task of its batch.

        Returns:
            Number of tasks deleted

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        targets = await self._future_siblings(task_id)
        deleted = await self.repository.delete_many([t.id for t in targets])
        if not deleted:
            raise TaskNotFoundError(task_id)
        logger.info("deleted %d task(s) from batch of %s", deleted, task_id)
        return deleted
