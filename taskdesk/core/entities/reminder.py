"""Reminder entity with a fire-once notification state."""

from datetime import datetime

from pydantic import BaseModel, Field

from taskdesk.core.clock import utc_now
from taskdesk.core.entities.target import TargetReference, TargetType


class Reminder(BaseModel):
    """
    Time-triggered reminder attached to a task or a note.

    ``fired_at`` records that the reminder was handed to a client by a
    due poll. A reminder is only ever emitted while it is not done and
    not yet fired.
    """

    id: int | None = None
    target_type: TargetType
    target_id: int
    due_at: datetime
    message: str = ""
    is_done: bool = False
    fired_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def target(self) -> TargetReference:
        return TargetReference(target_type=self.target_type, target_id=self.target_id)

    @property
    def is_armed(self) -> bool:
        """Eligible to fire once due."""
        return not self.is_done and self.fired_at is None

    def is_due(self, now: datetime) -> bool:
        return self.is_armed and self.due_at <= now

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Check if the reminder is past due and not done."""
        if self.is_done:
            return False
        return self.due_at < (now or utc_now())

    def reschedule(self, due_at: datetime, now: datetime) -> bool:
        """
        Move the due time.

        A future due time on an open reminder re-arms it. Moving it to
        the past or to ``now`` leaves ``fired_at`` untouched.

        Returns:
            True if the reminder was re-armed.
        """
        changed = due_at != self.due_at
        self.due_at = due_at
        if changed and not self.is_done and due_at > now:
            self.fired_at = None
            return True
        return False
