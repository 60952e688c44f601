"""Unit tests for SqliteTaskRepository.

Uses an in-memory SQLite database with every migration applied, so the real
SQL is exercised without touching user data.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from homeboard_cli.exceptions import TaskNotFoundError
from homeboard_cli.models import TaskCreate, TaskFilters, TaskUpdate

BATCH_AT = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


async def _add(repo, dates, title="Take out bins", created_by="sam", created_at=BATCH_AT, **kwargs):
    rows = [TaskCreate(title=title, due_date=d, **kwargs) for d in dates]
    return await repo.add_many(rows, created_by=created_by, created_at=created_at)


# ---------------------------------------------------------------------------
# add_many / get
# ---------------------------------------------------------------------------


class TestAddMany:
    @pytest.mark.asyncio
    async def test_rows_share_batch_timestamp(self, repo):
        tasks = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11)])

        assert len(tasks) == 2
        assert {t.created_at for t in tasks} == {BATCH_AT}
        assert {t.created_by for t in tasks} == {"sam"}
        assert [t.due_date for t in tasks] == [date(2024, 3, 4), date(2024, 3, 11)]
        assert len({t.id for t in tasks}) == 2

    @pytest.mark.asyncio
    async def test_defaults(self, repo):
        (task,) = await _add(repo, [None])
        assert task.status == "pending"
        assert task.priority == "medium"
        assert task.is_all_day is True
        assert task.skipped is False
        assert task.due_date is None

    @pytest.mark.asyncio
    async def test_get_round_trips_fields(self, repo):
        (created,) = await _add(
            repo,
            [date(2024, 3, 4)],
            description="Green bin too",
            priority="high",
            due_time="7:05",
            is_all_day=False,
            assignee="alex",
        )
        task = await repo.get(created.id)
        assert task == created
        assert task.due_time == "07:05"
        assert task.assignee == "alex"

    @pytest.mark.asyncio
    async def test_get_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.get("missing")


# ---------------------------------------------------------------------------
# list_all
# ---------------------------------------------------------------------------


class TestListAll:
    @pytest.mark.asyncio
    async def test_ordered_by_due_date_undated_last(self, repo):
        await _add(repo, [date(2024, 3, 11), None, date(2024, 3, 4)])
        tasks = await repo.list_all(TaskFilters())
        assert [t.due_date for t in tasks] == [date(2024, 3, 4), date(2024, 3, 11), None]

    @pytest.mark.asyncio
    async def test_date_range(self, repo):
        await _add(repo, [date(2024, 3, d) for d in (1, 8, 15, 22)])
        tasks = await repo.list_all(
            TaskFilters(date_from=date(2024, 3, 8), date_to=date(2024, 3, 15))
        )
        assert [t.due_date for t in tasks] == [date(2024, 3, 8), date(2024, 3, 15)]

    @pytest.mark.asyncio
    async def test_filters(self, repo):
        await _add(repo, [date(2024, 3, 4)], title="Bins", assignee="alex", priority="high")
        await _add(repo, [date(2024, 3, 4)], title="Laundry", assignee="sam")

        assert [t.title for t in await repo.list_all(TaskFilters(assignee="alex"))] == ["Bins"]
        assert [t.title for t in await repo.list_all(TaskFilters(priority="high"))] == ["Bins"]
        assert [t.title for t in await repo.list_all(TaskFilters(search="laun"))] == ["Laundry"]

    @pytest.mark.asyncio
    async def test_status_filter(self, repo):
        first, _ = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11)])
        await repo.set_status(first.id, "completed", "sam")

        pending = await repo.list_all(TaskFilters(status="pending"))
        everything = await repo.list_all(TaskFilters(status="all"))
        assert len(pending) == 1
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_skipped_hidden_unless_requested(self, repo):
        first, second = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11)])
        await repo.skip_instance(first.id, date(2024, 3, 4), "sam")

        visible = await repo.list_all(TaskFilters())
        assert [t.id for t in visible] == [second.id]

        with_skipped = await repo.list_all(TaskFilters(include_skipped=True))
        assert [(t.id, t.skipped) for t in with_skipped] == [
            (first.id, True),
            (second.id, False),
        ]

    @pytest.mark.asyncio
    async def test_limit_and_offset(self, repo):
        await _add(repo, [date(2024, 3, d) for d in (1, 2, 3, 4)])
        tasks = await repo.list_all(TaskFilters(limit=2, offset=1))
        assert [t.due_date for t in tasks] == [date(2024, 3, 2), date(2024, 3, 3)]


# ---------------------------------------------------------------------------
# update / delete
# ---------------------------------------------------------------------------


class TestUpdate:
    @pytest.mark.asyncio
    async def test_only_set_fields_change(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)], assignee="alex", description="x")
        updated = await repo.update(task.id, TaskUpdate(priority="urgent"))

        assert updated.priority == "urgent"
        assert updated.assignee == "alex"
        assert updated.description == "x"
        assert updated.updated_at >= task.updated_at

    @pytest.mark.asyncio
    async def test_explicit_none_clears(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)], assignee="alex")
        updated = await repo.update(task.id, TaskUpdate(assignee=None))
        assert updated.assignee is None

    @pytest.mark.asyncio
    async def test_due_date(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        updated = await repo.update(task.id, TaskUpdate(due_date=date(2024, 3, 5)))
        assert updated.due_date == date(2024, 3, 5)

    @pytest.mark.asyncio
    async def test_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.update("missing", TaskUpdate(title="x"))

    @pytest.mark.asyncio
    async def test_update_many(self, repo):
        tasks = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11), date(2024, 3, 18)])
        count = await repo.update_many([t.id for t in tasks[1:]], TaskUpdate(assignee="kim"))

        assert count == 2
        assignees = [t.assignee for t in await repo.list_all(TaskFilters())]
        assert assignees == [None, "kim", "kim"]

    @pytest.mark.asyncio
    async def test_update_many_without_fields(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        assert await repo.update_many([task.id], TaskUpdate()) == 0
        assert await repo.update_many([], TaskUpdate(title="x")) == 0


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        assert await repo.delete(task.id) is True
        with pytest.raises(TaskNotFoundError):
            await repo.get(task.id)

    @pytest.mark.asyncio
    async def test_delete_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.delete("missing")

    @pytest.mark.asyncio
    async def test_delete_many_cascades_skips(self, repo, memory_db):
        tasks = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11)])
        await repo.skip_instance(tasks[0].id, date(2024, 3, 4), "sam")

        assert await repo.delete_many([t.id for t in tasks] + ["missing"]) == 2
        remaining = memory_db.execute("SELECT COUNT(*) FROM task_skipped_instances")
        assert remaining.fetchone()[0] == 0


# ---------------------------------------------------------------------------
# Batches, status and skips
# ---------------------------------------------------------------------------


class TestListBatch:
    @pytest.mark.asyncio
    async def test_batch_key(self, repo):
        batch = await _add(repo, [date(2024, 3, 4), date(2024, 3, 11)])
        # Same title, other creator
        await _add(repo, [date(2024, 3, 4)], created_by="alex")
        # Same title and creator, created another day
        await _add(repo, [date(2024, 3, 4)], created_at=BATCH_AT + timedelta(days=1))
        # Other title
        await _add(repo, [date(2024, 3, 4)], title="Laundry")

        siblings = await repo.list_batch(batch[1])
        assert [t.id for t in siblings] == [t.id for t in batch]

    @pytest.mark.asyncio
    async def test_same_day_batches_merge(self, repo):
        first = await _add(repo, [date(2024, 3, 4)])
        second = await _add(repo, [date(2024, 3, 11)], created_at=BATCH_AT + timedelta(hours=2))
        siblings = await repo.list_batch(first[0])
        assert {t.id for t in siblings} == {first[0].id, second[0].id}


class TestSetStatus:
    @pytest.mark.asyncio
    async def test_complete_records_user(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        done = await repo.set_status(task.id, "completed", "alex")
        assert done.status == "completed"
        assert done.completed_by == "alex"
        assert done.completed_at is not None

    @pytest.mark.asyncio
    async def test_reopen_clears_completion(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        await repo.set_status(task.id, "completed", "alex")
        reopened = await repo.set_status(task.id, "in_progress", "alex")
        assert reopened.status == "in_progress"
        assert reopened.completed_by is None
        assert reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.set_status("missing", "completed", "alex")


class TestSkipInstance:
    @pytest.mark.asyncio
    async def test_skipping_twice_keeps_one_row(self, repo, memory_db):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        await repo.skip_instance(task.id, date(2024, 3, 4), "sam")
        await repo.skip_instance(task.id, date(2024, 3, 4), "alex")

        rows = memory_db.execute(
            "SELECT skipped_by FROM task_skipped_instances WHERE task_id = ?", (task.id,)
        ).fetchall()
        assert [r["skipped_by"] for r in rows] == ["alex"]
        assert (await repo.get(task.id)).skipped is True

    @pytest.mark.asyncio
    async def test_other_date_does_not_mark_task(self, repo):
        (task,) = await _add(repo, [date(2024, 3, 4)])
        await repo.skip_instance(task.id, date(2024, 3, 5), "sam")
        assert (await repo.get(task.id)).skipped is False

    @pytest.mark.asyncio
    async def test_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.skip_instance("missing", date(2024, 3, 4), "sam")
