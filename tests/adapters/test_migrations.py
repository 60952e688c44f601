"""Tests for the migration runner and the shipped migrations."""

from __future__ import annotations

import sqlite3

import pytest

from homeboard_cli.adapters.sqlite.migrations import (
    ALL_MIGRATIONS,
    Migration,
    MigrationRunner,
    check_sequence,
)
from homeboard_cli.exceptions import StorageError

LATEST = len(ALL_MIGRATIONS)


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _tables(connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in rows.fetchall()}


def _step(version, *statements):
    return Migration(version=version, description=f"step {version}", statements=statements)


class TestCheckSequence:
    def test_shipped_migrations_are_contiguous(self):
        assert [m.version for m in check_sequence(ALL_MIGRATIONS)] == list(range(1, LATEST + 1))

    def test_orders_by_version(self):
        ordered = check_sequence([_step(2), _step(1), _step(3)])
        assert [m.version for m in ordered] == [1, 2, 3]

    @pytest.mark.parametrize(
        "versions",
        [[1, 3], [2, 3], [1, 1, 2], [0, 1]],
    )
    def test_rejects_gaps_and_repeats(self, versions):
        with pytest.raises(StorageError, match="without gaps or repeats"):
            check_sequence([_step(v) for v in versions])

    def test_empty_is_allowed(self):
        assert check_sequence([]) == []


class TestUpgrade:
    def test_fresh_database_is_version_zero(self, conn):
        assert MigrationRunner(conn).schema_version == 0

    def test_all_migrations_apply_in_order(self, conn):
        runner = MigrationRunner(conn)
        applied = runner.upgrade(reversed(ALL_MIGRATIONS))

        assert applied == list(range(1, LATEST + 1))
        assert runner.schema_version == LATEST
        assert {
            "tasks",
            "task_skipped_instances",
            "task_templates",
            "schema_version",
        } <= _tables(conn)
        assert [h["version"] for h in runner.history()] == applied
        assert runner.history()[0]["description"] == "Initial database schema"

    def test_rerun_is_noop(self, conn):
        runner = MigrationRunner(conn)
        runner.upgrade(ALL_MIGRATIONS)
        assert runner.upgrade(ALL_MIGRATIONS) == []

    def test_partial_database_gets_remaining_steps(self, conn):
        runner = MigrationRunner(conn)
        assert runner.upgrade(ALL_MIGRATIONS[:1]) == [1]
        assert "task_templates" not in _tables(conn)

        assert runner.upgrade(ALL_MIGRATIONS) == list(range(2, LATEST + 1))
        assert "task_templates" in _tables(conn)

    def test_newer_database_is_refused(self, conn):
        runner = MigrationRunner(conn)
        runner.upgrade(ALL_MIGRATIONS)

        with pytest.raises(StorageError, match=f"schema version {LATEST} is newer"):
            runner.upgrade(ALL_MIGRATIONS[:1])

    def test_failed_migration_is_rolled_back(self, conn):
        runner = MigrationRunner(conn)
        broken = _step(LATEST + 1, "CREATE TABLE scratch (x INTEGER)", "THIS IS NOT SQL")

        with pytest.raises(StorageError, match=f"Migration {LATEST + 1} .* failed"):
            runner.upgrade([*ALL_MIGRATIONS, broken])

        assert runner.schema_version == LATEST
        assert "scratch" not in _tables(conn)


class TestShippedSchema:
    def test_tasks_table_enforces_status_values(self, conn):
        MigrationRunner(conn).upgrade(ALL_MIGRATIONS)
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                """
                INSERT INTO tasks (id, title, status, created_by, created_at, updated_at)
                VALUES ('t1', 'Bins', 'skipped', 'sam', '2024-03-01', '2024-03-01')
                """
            )

    def test_template_names_are_unique_ignoring_case(self, conn):
        MigrationRunner(conn).upgrade(ALL_MIGRATIONS)
        insert = """
            INSERT INTO task_templates (id, name, title, created_by, created_at, updated_at)
            VALUES (?, ?, 'Bins', 'sam', '2024-03-01', '2024-03-01')
        """
        conn.execute(insert, ("a", "Bins"))
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(insert, ("b", "bins"))

    def test_template_repeat_interval_is_checked(self, conn):
        MigrationRunner(conn).upgrade(ALL_MIGRATIONS)
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                """
                INSERT INTO task_templates
                    (id, name, title, repeat_interval, created_by, created_at, updated_at)
                VALUES ('a', 'Bins', 'Bins', 'daily', 'sam', '2024-03-01', '2024-03-01')
                """
            )
