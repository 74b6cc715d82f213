"""
SQLite implementation of reminder storage.

Handles CRUD and the atomic due-claim used by reminder polling.
"""

from datetime import datetime

import aiosqlite

from taskdesk.config import get_logger
from taskdesk.core.clock import from_storage, to_storage, utc_now
from taskdesk.core.entities.reminder import Reminder
from taskdesk.core.entities.target import TargetType
from taskdesk.core.exceptions import DatabaseError
from taskdesk.core.interfaces.storage import IReminderStore
from taskdesk.infrastructure.storage.sqlite.connection import PooledStore

logger = get_logger(__name__)


class SQLiteReminderStore(PooledStore, IReminderStore):
    """SQLite implementation of reminder storage."""

    async def create(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        reminder.updated_at = utc_now()
        try:
            async with self._transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO reminders (
                        target_type, target_id, due_at, message,
                        is_done, fired_at, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        reminder.target_type.value,
                        reminder.target_id,
                        to_storage(reminder.due_at),
                        reminder.message,
                        1 if reminder.is_done else 0,
                        to_storage(reminder.fired_at) if reminder.fired_at else None,
                        to_storage(reminder.created_at),
                        to_storage(reminder.updated_at),
                    ),
                )
                reminder.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError("create_reminder", str(e)) from e
        logger.info("reminder_stored", reminder_id=reminder.id, target=str(reminder.target))
        return reminder

    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM reminders WHERE id = ?", (reminder_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def update(self, reminder: Reminder, rearm: bool = False) -> Reminder:
        """
        Update an existing reminder.

        ``fired_at`` is owned by ``claim_due``: it is only ever cleared
        here, when ``rearm`` is set, and is never written from the
        entity. The returned reminder is re-read after the write.
        """
        reminder.updated_at = utc_now()
        try:
            async with self._transaction(immediate=True) as conn:
                await conn.execute(
                    """
                    UPDATE reminders SET
                        due_at = ?, message = ?, is_done = ?,
                        fired_at = CASE WHEN ? THEN NULL ELSE fired_at END,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        to_storage(reminder.due_at),
                        reminder.message,
                        1 if reminder.is_done else 0,
                        1 if rearm else 0,
                        to_storage(reminder.updated_at),
                        reminder.id,
                    ),
                )
                cursor = await conn.execute(
                    "SELECT * FROM reminders WHERE id = ?", (reminder.id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError("update_reminder", str(e)) from e
        if row is None:
            return reminder
        return self._row_to_entity(row)

    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder by ID."""
        async with self._transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM reminders WHERE id = ?", (reminder_id,)
            )
            return cursor.rowcount > 0

    async def list_reminders(
        self, include_done: bool = False, limit: int | None = None, offset: int = 0
    ) -> list[Reminder]:
        """List reminders with optional done filter."""
        # SQLite treats a negative LIMIT as unbounded
        limit = -1 if limit is None else limit
        async with self._connection() as conn:
            if include_done:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    ORDER BY due_at ASC, id ASC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    WHERE is_done = 0
                    ORDER BY due_at ASC, id ASC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def claim_due(self, now: datetime, limit: int) -> list[Reminder]:
        """
        Select and stamp due reminders inside one write transaction.

        ``BEGIN IMMEDIATE`` takes the database write lock before the
        SELECT, so two pollers on separate connections serialize and
        the second sees the first one's ``fired_at``. The UPDATE
        re-checks ``fired_at IS NULL`` as well.
        """
        stamp = to_storage(now)
        try:
            async with self._transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM reminders
                    WHERE is_done = 0
                      AND fired_at IS NULL
                      AND due_at <= ?
                    ORDER BY due_at ASC, id ASC
                    LIMIT ?
                    """,
                    (stamp, limit),
                )
                rows = await cursor.fetchall()
                if not rows:
                    return []

                ids = [row["id"] for row in rows]
                placeholders = ", ".join("?" for _ in ids)
                await conn.execute(
                    f"""
                    UPDATE reminders
                    SET fired_at = ?, updated_at = ?
                    WHERE id IN ({placeholders})
                      AND fired_at IS NULL
                      AND is_done = 0
                    """,
                    (stamp, stamp, *ids),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("claim_due_reminders", str(e)) from e

        claimed = []
        for row in rows:
            reminder = self._row_to_entity(row)
            reminder.fired_at = now
            reminder.updated_at = now
            claimed.append(reminder)
        return claimed

    def _row_to_entity(self, row: aiosqlite.Row) -> Reminder:
        """Convert database row to Reminder entity."""
        return Reminder(
            id=row["id"],
            target_type=TargetType(row["target_type"]),
            target_id=row["target_id"],
            due_at=from_storage(row["due_at"]),
            message=row["message"] or "",
            is_done=bool(row["is_done"]),
            fired_at=from_storage(row["fired_at"]),
            created_at=from_storage(row["created_at"]) or utc_now(),
            updated_at=from_storage(row["updated_at"]) or utc_now(),
        )
