"""Wiring of repositories and services from the active configuration.

Commands call ``get_task_service()`` and ``get_template_service()`` instead
of building repositories themselves, so tests can patch a single seam.
"""

from __future__ import annotations

from functools import lru_cache

from homeboard_cli.adapters.sqlite import SqliteTaskRepository, SqliteTemplateRepository
from homeboard_cli.repositories import TaskRepository, TemplateRepository
from homeboard_cli.services.config_service import get_config_service
from homeboard_cli.services.task_service import TaskService
from homeboard_cli.services.template_service import TemplateService


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Get the task repository for the configured database."""
    config_service = get_config_service()
    return SqliteTaskRepository(db_path=config_service.get_db_path())


@lru_cache(maxsize=1)
def get_template_repository() -> TemplateRepository:
    """Get the template repository for the configured database."""
    config_service = get_config_service()
    return SqliteTemplateRepository(db_path=config_service.get_db_path())


def get_task_service() -> TaskService:
    """Get a TaskService acting as the configured user."""
    config = get_config_service().config
    return TaskService(
        get_task_repository(),
        user=config.user,
        horizon_days=config.schedule.horizon_days,
    )


def get_template_service() -> TemplateService:
    """Get a TemplateService acting as the configured user."""
    config_service = get_config_service()
    return TemplateService(get_template_repository(), user=config_service.config.user)
