"""Shared test fixtures and configuration.

Keeps tests away from the real config, data and log directories.
"""

from __future__ import annotations

import os
import sqlite3
import tempfile
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Module-level loggers are created on import; point XDG dirs somewhere
# disposable before any homeboard_cli module is imported.
_SCRATCH = tempfile.mkdtemp(prefix="homeboard-tests-")
for _var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME"):
    os.environ[_var] = os.path.join(_SCRATCH, _var.lower())


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Send config and database files to *tmp_path* and reset cached services."""
    from homeboard_cli.adapters.sqlite.connection import DatabaseConnection
    from homeboard_cli.services.config_service import get_config_service
    from homeboard_cli.services.context_manager import (
        get_task_repository,
        get_template_repository,
    )

    get_config_service.cache_clear()
    get_task_repository.cache_clear()
    get_template_repository.cache_clear()
    with (
        patch(
            "homeboard_cli.services.config_service.user_config_dir",
            return_value=str(tmp_path / "config"),
        ),
        patch(
            "homeboard_cli.adapters.sqlite.connection.user_data_dir",
            return_value=str(tmp_path / "data"),
        ),
    ):
        yield tmp_path
    DatabaseConnection.close_connection()
    get_config_service.cache_clear()
    get_task_repository.cache_clear()
    get_template_repository.cache_clear()


@pytest.fixture()
def memory_db():
    """In-memory database with every migration applied."""
    from homeboard_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    MigrationRunner(conn).upgrade(ALL_MIGRATIONS)
    yield conn
    conn.close()


@pytest.fixture()
def repo(memory_db):
    """SqliteTaskRepository backed by the in-memory database."""
    from homeboard_cli.adapters.sqlite.task_repository import SqliteTaskRepository

    return SqliteTaskRepository(connection=memory_db)


@pytest.fixture()
def template_repo(memory_db):
    """SqliteTemplateRepository backed by the in-memory database."""
    from homeboard_cli.adapters.sqlite.template_repository import SqliteTemplateRepository

    return SqliteTemplateRepository(connection=memory_db)


@pytest.fixture()
def mock_repo():
    """A TaskRepository stand-in whose methods are AsyncMocks."""
    repo = MagicMock()
    for name in (
        "list_all",
        "get",
        "add_many",
        "update",
        "update_many",
        "delete",
        "delete_many",
        "list_batch",
        "set_status",
        "skip_instance",
    ):
        setattr(repo, name, AsyncMock())
    return repo
