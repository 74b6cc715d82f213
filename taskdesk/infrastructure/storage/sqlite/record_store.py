"""
SQLite implementation of the task and note record store.

Only the operations reminders and link attachments depend on are
implemented here: creating, reading, listing and deleting records.
"""

import json

import aiosqlite

from taskdesk.config import get_logger
from taskdesk.core.clock import from_storage, to_storage, utc_now
from taskdesk.core.entities.record import Note, Subtask, Task, TaskStatus
from taskdesk.core.exceptions import DatabaseError
from taskdesk.core.interfaces.storage import IRecordStore
from taskdesk.infrastructure.storage.sqlite.connection import PooledStore

logger = get_logger(__name__)


class SQLiteRecordStore(PooledStore, IRecordStore):
    """SQLite implementation of task and note records."""

    # Task operations

    async def create_task(self, task: Task) -> Task:
        """Create a new task."""
        try:
            async with self._transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO tasks (title, notes, status, due_date, tags, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        task.title,
                        task.notes,
                        task.status.value,
                        task.due_date,
                        json.dumps(task.tags),
                        to_storage(task.created_at),
                    ),
                )
                task.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError("create_task", str(e)) from e
        logger.info("task_created", task_id=task.id)
        return task

    async def get_task(self, task_id: int) -> Task | None:
        """Get task by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_task(row)

    async def list_tasks(self, limit: int = 100, offset: int = 0) -> list[Task]:
        """List tasks, newest first."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM tasks ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_task(row) for row in rows]

    async def delete_task(self, task_id: int) -> bool:
        """Delete a task; subtasks and note links cascade."""
        async with self._transaction() as conn:
            cursor = await conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("task_deleted", task_id=task_id)
            return deleted

    async def add_subtask(self, subtask: Subtask) -> Subtask:
        """Attach a subtask to a task."""
        try:
            async with self._transaction() as conn:
                cursor = await conn.execute(
                    "INSERT INTO subtasks (task_id, content, is_completed) VALUES (?, ?, ?)",
                    (subtask.task_id, subtask.content, 1 if subtask.is_completed else 0),
                )
                subtask.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError("add_subtask", str(e)) from e
        return subtask

    # Note operations

    async def create_note(self, note: Note) -> Note:
        """Create a new note."""
        try:
            async with self._transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO notes (title, body, created_at, updated_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        note.title,
                        note.body,
                        to_storage(note.created_at),
                        to_storage(note.updated_at),
                    ),
                )
                note.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError("create_note", str(e)) from e
        logger.info("note_created", note_id=note.id)
        return note

    async def get_note(self, note_id: int) -> Note | None:
        """Get note by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM notes WHERE id = ?", (note_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_note(row)

    async def list_notes(self, limit: int = 100, offset: int = 0) -> list[Note]:
        """List notes, most recently updated first."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM notes ORDER BY updated_at DESC, id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_note(row) for row in rows]

    async def delete_note(self, note_id: int) -> bool:
        """Delete a note; task links cascade."""
        async with self._transaction() as conn:
            cursor = await conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("note_deleted", note_id=note_id)
            return deleted

    async def link_note_to_task(self, note_id: int, task_id: int) -> None:
        """Cross-link a note and a task. Linking twice is a no-op."""
        try:
            async with self._transaction() as conn:
                await conn.execute(
                    "INSERT OR IGNORE INTO note_task_links (note_id, task_id) VALUES (?, ?)",
                    (note_id, task_id),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("link_note_to_task", str(e)) from e

    # Helpers

    def _row_to_task(self, row: aiosqlite.Row) -> Task:
        try:
            tags = json.loads(row["tags"] or "[]")
        except json.JSONDecodeError:
            tags = []
        return Task(
            id=row["id"],
            title=row["title"],
            notes=row["notes"] or "",
            status=TaskStatus(row["status"]),
            due_date=row["due_date"],
            tags=tags,
            created_at=from_storage(row["created_at"]) or utc_now(),
        )

    def _row_to_note(self, row: aiosqlite.Row) -> Note:
        return Note(
            id=row["id"],
            title=row["title"],
            body=row["body"] or "",
            created_at=from_storage(row["created_at"]) or utc_now(),
            updated_at=from_storage(row["updated_at"]) or utc_now(),
        )
