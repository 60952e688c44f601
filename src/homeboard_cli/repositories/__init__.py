"""Repository interfaces for the Homeboard CLI.

Abstract base classes defining the contract for task and template
persistence. The SQLite implementations live in
``homeboard_cli.adapters.sqlite``.
"""

from .repository import TaskRepository, TemplateRepository

__all__ = ["TaskRepository", "TemplateRepository"]
