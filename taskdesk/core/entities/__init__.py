"""Core domain entities."""

from taskdesk.core.entities.link_attachment import LinkAttachment, LinkPreview
from taskdesk.core.entities.record import Note, Subtask, Task, TaskStatus
from taskdesk.core.entities.reminder import Reminder
from taskdesk.core.entities.target import ResolvedTarget, TargetReference, TargetType

__all__ = [
    # Targets
    "TargetType",
    "TargetReference",
    "ResolvedTarget",
    # Reminders
    "Reminder",
    # Links
    "LinkAttachment",
    "LinkPreview",
    # Records
    "Task",
    "TaskStatus",
    "Subtask",
    "Note",
]
