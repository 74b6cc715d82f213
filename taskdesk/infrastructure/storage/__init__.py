"""Storage infrastructure implementations."""

from taskdesk.infrastructure.storage.sqlite import (
    SQLiteLinkAttachmentStore,
    SQLiteRecordStore,
    SQLiteReminderStore,
    close_pool,
    get_pool,
)

__all__ = [
    # SQLite stores
    "SQLiteRecordStore",
    "SQLiteReminderStore",
    "SQLiteLinkAttachmentStore",
    # Connection pool
    "get_pool",
    "close_pool",
]
