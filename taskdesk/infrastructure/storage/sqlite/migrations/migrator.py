"""
Schema migrator for the TaskDesk SQLite database.

Migrations are ``vNNN_name.sql`` scripts shipped next to this module and
applied in version order. Each applied script is recorded in
``schema_migrations`` with a checksum; a recorded script whose file has
since changed stops the run instead of being applied twice.
"""

import asyncio
import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from taskdesk.config import get_logger, get_settings
from taskdesk.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "schema_migrations",
    "tasks",
    "subtasks",
    "notes",
    "note_task_links",
    "reminders",
    "link_attachments",
)


@dataclass(frozen=True)
class Migration:
    """One versioned schema script."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "Migration":
        match = _FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration scripts in ``migrations_dir``, oldest first."""
    migrations = []
    for path in sorted(migrations_dir.glob("v*.sql")):
        try:
            migrations.append(Migration.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return sorted(migrations, key=lambda m: int(m.version))


async def applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    """Recorded version -> checksum; empty before the first migration."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> None:
    started = time.monotonic()
    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
            "VALUES (?, ?, ?, ?)",
            (
                migration.version,
                migration.name,
                migration.checksum,
                int((time.monotonic() - started) * 1000),
            ),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        raise DatabaseError(f"migration v{migration.version}_{migration.name}", str(e)) from e

    logger.info("migration_applied", version=migration.version, name=migration.name)


async def run_migrations(
    db_path: Path | None = None,
    migrations: list[Migration] | None = None,
) -> list[str]:
    """
    Bring the database at ``db_path`` up to the newest schema.

    Args:
        db_path: Database file, defaults to ``settings.storage.db_path``
        migrations: Scripts to apply, defaults to the bundled ones

    Returns:
        Versions applied by this run, empty when already current

    Raises:
        DatabaseError: If a script fails or a recorded script was edited
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    if migrations is None:
        migrations = discover_migrations()

    applied_now: list[str] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        recorded = await applied_checksums(conn)

        for migration in migrations:
            checksum = recorded.get(migration.version)
            if checksum is None:
                await _apply(conn, migration)
                applied_now.append(migration.version)
            elif checksum != migration.checksum:
                raise DatabaseError(
                    f"migration v{migration.version}_{migration.name}",
                    f"checksum changed from {checksum} to {migration.checksum}",
                )

    logger.info("database_migrated", db_path=str(db_path), applied=applied_now)
    return applied_now


async def missing_tables(db_path: Path | None = None) -> list[str]:
    """Required tables absent from the database at ``db_path``."""
    db_path = db_path or get_settings().storage.db_path
    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        existing = {row[0] for row in await cursor.fetchall()}
    return [table for table in REQUIRED_TABLES if table not in existing]


def main() -> None:
    """``taskdesk-migrate`` entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Apply TaskDesk schema migrations")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument(
        "--verify", action="store_true", help="Only report required tables that are missing"
    )
    args = parser.parse_args()

    async def run() -> int:
        if args.verify:
            missing = await missing_tables(args.db_path)
            print("Schema OK" if not missing else f"Missing tables: {', '.join(missing)}")
            return 1 if missing else 0
        applied = await run_migrations(args.db_path)
        print(f"Applied: {', '.join(applied)}" if applied else "Schema already current")
        return 0

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
