"""Database migrations module."""

from taskdesk.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    Migration,
    discover_migrations,
    missing_tables,
    run_migrations,
)

__all__ = [
    "REQUIRED_TABLES",
    "Migration",
    "discover_migrations",
    "missing_tables",
    "run_migrations",
]
