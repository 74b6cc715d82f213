"""SQLite storage implementations."""

from taskdesk.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    PooledStore,
    close_pool,
    get_pool,
)
from taskdesk.infrastructure.storage.sqlite.link_attachment_store import (
    SQLiteLinkAttachmentStore,
)
from taskdesk.infrastructure.storage.sqlite.record_store import SQLiteRecordStore
from taskdesk.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore

# Singleton instances
_record_store: SQLiteRecordStore | None = None
_reminder_store: SQLiteReminderStore | None = None
_link_attachment_store: SQLiteLinkAttachmentStore | None = None


async def get_record_store() -> SQLiteRecordStore:
    """Get singleton record store instance."""
    global _record_store
    if _record_store is None:
        _record_store = SQLiteRecordStore()
    return _record_store


async def get_reminder_store() -> SQLiteReminderStore:
    """Get singleton reminder store instance."""
    global _reminder_store
    if _reminder_store is None:
        _reminder_store = SQLiteReminderStore()
    return _reminder_store


async def get_link_attachment_store() -> SQLiteLinkAttachmentStore:
    """Get singleton link attachment store instance."""
    global _link_attachment_store
    if _link_attachment_store is None:
        _link_attachment_store = SQLiteLinkAttachmentStore()
    return _link_attachment_store


__all__ = [
    # Connection
    "ConnectionPool",
    "PooledStore",
    "get_pool",
    "close_pool",
    # Store classes
    "SQLiteRecordStore",
    "SQLiteReminderStore",
    "SQLiteLinkAttachmentStore",
    # Factory functions
    "get_record_store",
    "get_reminder_store",
    "get_link_attachment_store",
]
