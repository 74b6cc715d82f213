"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest

from taskdesk.application.services import reset_services
from taskdesk.config import reset_settings
from taskdesk.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteLinkAttachmentStore,
    SQLiteRecordStore,
    SQLiteReminderStore,
)
from taskdesk.infrastructure.storage.sqlite.migrations import run_migrations


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point settings at a per-test data directory."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("STORAGE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("LINK_SCREENSHOTS_ENABLED", "false")
    reset_settings()
    reset_services()
    yield data_dir
    reset_settings()
    reset_services()


@pytest.fixture
async def migrated_db(tmp_path: Path) -> Path:
    """Temporary database with all migrations applied."""
    db_path = tmp_path / "test.db"
    await run_migrations(db_path)
    return db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Connection pool over the migrated temporary database."""
    pool = ConnectionPool(db_path=migrated_db, pool_size=3, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def record_store(pool: ConnectionPool) -> SQLiteRecordStore:
    return SQLiteRecordStore(pool)


@pytest.fixture
def reminder_store(pool: ConnectionPool) -> SQLiteReminderStore:
    return SQLiteReminderStore(pool)


@pytest.fixture
def link_store(pool: ConnectionPool) -> SQLiteLinkAttachmentStore:
    return SQLiteLinkAttachmentStore(pool)
