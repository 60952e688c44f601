"""Template service - named presets for creating tasks."""

from __future__ import annotations

from homeboard_cli.models import TaskTemplate, TaskTemplateCreate
from homeboard_cli.repositories import TemplateRepository
from homeboard_cli.utils.logger import get_logger

logger = get_logger("services.template_service")


class TemplateService:
    """Service for task template business logic.

    Args:
        template_repository: TemplateRepository implementation for data access
        user: Name recorded as the creator of new templates
    """

    def __init__(self, template_repository: TemplateRepository, user: str):
        self.repository = template_repository
        self.user = user

    async def create_template(self, template: TaskTemplateCreate) -> TaskTemplate:
        """Store a new template.

        Raises:
            ValidationError: If the name is already taken
        """
        created = await self.repository.add(template, created_by=self.user)
        logger.info("created template '%s'", created.name)
        return created

    async def list_templates(self) -> list[TaskTemplate]:
        return await self.repository.list_all()

    async def get_template(self, name: str) -> TaskTemplate:
        """Get a template by name, ignoring case."""
        return await self.repository.get_by_name(name)

    async def delete_template(self, name: str) -> bool:
        deleted = await self.repository.delete(name)
        logger.info("deleted template '%s'", name)
        return deleted
