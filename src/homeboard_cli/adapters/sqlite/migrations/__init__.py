"""Schema history of the local SQLite task board."""

from homeboard_cli.adapters.sqlite import schema

from .runner import Migration, MigrationRunner, check_sequence

ALL_MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="Initial database schema",
        statements=(schema.CREATE_TASKS_TABLE, *schema.CREATE_TASK_INDEXES),
    ),
    Migration(
        version=2,
        description="Add skipped task instances",
        statements=(
            schema.CREATE_TASK_SKIPPED_INSTANCES_TABLE,
            *schema.CREATE_SKIPPED_INDEXES,
        ),
    ),
    Migration(
        version=3,
        description="Add task templates",
        statements=(schema.CREATE_TASK_TEMPLATES_TABLE,),
    ),
)

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
    "check_sequence",
]
