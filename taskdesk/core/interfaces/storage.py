"""
Abstract interfaces for storage providers.

Defines contracts for the record, reminder and link attachment stores.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from taskdesk.core.entities.link_attachment import LinkAttachment
from taskdesk.core.entities.record import Note, Subtask, Task
from taskdesk.core.entities.reminder import Reminder
from taskdesk.core.entities.target import TargetReference


class IRecordStore(ABC):
    """
    Abstract interface for task and note records.

    Deleting a task or note cascades to its subtasks and cross-links
    but never to reminders or link attachments.
    """

    # Task operations
    @abstractmethod
    async def create_task(self, task: Task) -> Task:
        """Create a new task."""
        pass

    @abstractmethod
    async def get_task(self, task_id: int) -> Task | None:
        """Get task by ID."""
        pass

    @abstractmethod
    async def list_tasks(self, limit: int = 100, offset: int = 0) -> list[Task]:
        """List tasks, newest first."""
        pass

    @abstractmethod
    async def delete_task(self, task_id: int) -> bool:
        """Delete a task and its dependent rows."""
        pass

    @abstractmethod
    async def add_subtask(self, subtask: Subtask) -> Subtask:
        """Attach a subtask to a task."""
        pass

    # Note operations
    @abstractmethod
    async def create_note(self, note: Note) -> Note:
        """Create a new note."""
        pass

    @abstractmethod
    async def get_note(self, note_id: int) -> Note | None:
        """Get note by ID."""
        pass

    @abstractmethod
    async def list_notes(self, limit: int = 100, offset: int = 0) -> list[Note]:
        """List notes, most recently updated first."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: int) -> bool:
        """Delete a note and its task links."""
        pass

    @abstractmethod
    async def link_note_to_task(self, note_id: int, task_id: int) -> None:
        """Cross-link a note and a task."""
        pass


class IReminderStore(ABC):
    """Abstract interface for reminder storage."""

    @abstractmethod
    async def create(self, reminder: Reminder) -> Reminder:
        """Create a new reminder."""
        pass

    @abstractmethod
    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID."""
        pass

    @abstractmethod
    async def update(self, reminder: Reminder, rearm: bool = False) -> Reminder:
        """
        Persist edited fields of an existing reminder.

        Never writes the entity's ``fired_at``; a stamp set by a
        concurrent ``claim_due`` survives the edit. ``rearm`` clears it.
        Returns the reminder as stored after the write.
        """
        pass

    @abstractmethod
    async def delete(self, reminder_id: int) -> bool:
        """Delete a reminder by ID."""
        pass

    @abstractmethod
    async def list_reminders(
        self, include_done: bool = False, limit: int | None = None, offset: int = 0
    ) -> list[Reminder]:
        """List reminders ordered by due time, then id. ``limit=None`` lists all."""
        pass

    @abstractmethod
    async def claim_due(self, now: datetime, limit: int) -> list[Reminder]:
        """
        Atomically select armed reminders due at ``now`` and mark them fired.

        Implementations must make selection and stamping one indivisible
        unit: a reminder returned by one call is never returned by
        another, concurrent or later.

        Args:
            now: Poll instant; also the value written to ``fired_at``.
            limit: Maximum number of reminders to claim.

        Returns:
            Claimed reminders ordered by due time, then id.
        """
        pass


class ILinkAttachmentStore(ABC):
    """Abstract interface for link attachment storage."""

    @abstractmethod
    async def create(self, attachment: LinkAttachment) -> LinkAttachment:
        """Create a new link attachment."""
        pass

    @abstractmethod
    async def get(self, link_id: int) -> LinkAttachment | None:
        """Get link attachment by ID."""
        pass

    @abstractmethod
    async def list_by_owner(self, owner: TargetReference) -> list[LinkAttachment]:
        """List attachments of one owner, most recently updated first."""
        pass

    @abstractmethod
    async def delete(self, link_id: int) -> bool:
        """Delete a link attachment by ID."""
        pass
