"""Schema migrations for the local task board database.

A migration is a numbered group of SQL statements. Versions start at 1 and
run without gaps, so the highest version recorded in ``schema_version`` is
the schema version of the file.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from homeboard_cli.exceptions import StorageError
from homeboard_cli.utils.logger import get_logger

logger = get_logger("adapters.sqlite.migrations")

_CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """Statements that move the schema from ``version - 1`` to ``version``."""

    version: int
    description: str
    statements: tuple[str, ...]


def check_sequence(migrations: Iterable[Migration]) -> list[Migration]:
    """Order migrations by version.

    Raises:
        StorageError: If the versions are not 1, 2, 3, ... with no gaps or repeats
    """
    ordered = sorted(migrations, key=lambda m: m.version)
    versions = [m.version for m in ordered]
    if versions != list(range(1, len(ordered) + 1)):
        raise StorageError(
            f"Migration versions must run 1..{len(ordered)} without gaps or repeats, "
            f"got {versions}"
        )
    return ordered


class MigrationRunner:
    """Brings a database up to the newest schema version it knows about."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        with connection:
            connection.execute(_CREATE_VERSION_TABLE)

    @property
    def schema_version(self) -> int:
        """Highest applied version; 0 for an empty database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def history(self) -> list[dict]:
        """Applied migrations, oldest first."""
        cursor = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        )
        return [
            {"version": row[0], "description": row[1], "applied_at": row[2]}
            for row in cursor.fetchall()
        ]

    def upgrade(self, migrations: Iterable[Migration]) -> list[int]:
        """Apply every migration newer than the current schema version.

        Returns:
            The versions applied, in order (empty when already up to date)

        Raises:
            StorageError: If the file was written by a newer schema, or a
                migration fails (its statements are rolled back)
        """
        ordered = check_sequence(migrations)
        current = self.schema_version
        latest = len(ordered)
        if current > latest:
            raise StorageError(
                f"Database schema version {current} is newer than the "
                f"supported version {latest}; upgrade homeboard-cli"
            )

        applied = []
        for migration in ordered[current:]:
            self._apply(migration)
            applied.append(migration.version)
        return applied

    def _apply(self, migration: Migration) -> None:
        # Explicit BEGIN so the DDL is part of the transaction too
        try:
            self.connection.execute("BEGIN")
            for statement in migration.statements:
                self.connection.execute(statement)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.execute("COMMIT")
        except sqlite3.Error as e:
            self.connection.rollback()
            logger.error("migration %d failed: %s", migration.version, e)
            raise StorageError(
                f"Migration {migration.version} ({migration.description}) failed: {e}"
            ) from e

        logger.info("applied migration %d: %s", migration.version, migration.description)
