"""Task and note records owned by the record store."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from taskdesk.core.clock import utc_now


class TaskStatus(str, Enum):
    """Workflow status of a task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Subtask(BaseModel):
    """Checklist item belonging to a task."""

    id: int | None = None
    task_id: int
    content: str
    is_completed: bool = False


class Task(BaseModel):
    """A unit of work."""

    id: int | None = None
    title: str
    notes: str = ""
    status: TaskStatus = TaskStatus.TODO
    due_date: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)


class Note(BaseModel):
    """Free-form note that may be linked to tasks."""

    id: int | None = None
    title: str
    body: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
