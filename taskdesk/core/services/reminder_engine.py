"""
Reminder engine.

CRUD over reminders plus the due-poll transition that hands each due
reminder to exactly one polling client. There is no background timer:
clients poll, and each poll claims whatever became due since the last.

State per reminder (``is_done`` is an orthogonal user flag):

    ARMED (fired_at is None) --poll, due_at <= now--> FIRED
    FIRED --edit due_at to the future--> ARMED
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from taskdesk.config import get_logger
from taskdesk.core.clock import ensure_utc, parse_instant, utc_now
from taskdesk.core.entities.reminder import Reminder
from taskdesk.core.entities.target import TargetReference
from taskdesk.core.exceptions import ReminderNotFoundError
from taskdesk.core.interfaces.storage import IReminderStore
from taskdesk.core.services.target_resolver import TargetResolver

logger = get_logger(__name__)

DEFAULT_POLL_TAKE = 10
MAX_POLL_TAKE = 50


class ReminderEngine:
    """
    Service for reminder lifecycle and firing.

    The store handle is injected; the atomic claim in ``poll_due`` is the
    store's responsibility (see ``IReminderStore.claim_due``).
    """

    def __init__(
        self,
        reminder_store: IReminderStore,
        resolver: TargetResolver,
        *,
        default_take: int = DEFAULT_POLL_TAKE,
        max_take: int = MAX_POLL_TAKE,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = reminder_store
        self._resolver = resolver
        self._default_take = default_take
        self._max_take = max_take
        self._clock = clock

    async def create(
        self,
        target: TargetReference,
        due_at: Any,
        message: str = "",
    ) -> Reminder:
        """
        Create an armed reminder for an existing task or note.

        Raises:
            InvalidTimestampError: If ``due_at`` is not an instant.
            TargetNotFoundError: If the target does not resolve.
        """
        due = parse_instant(due_at, "dueAt")
        await self._resolver.require(target)

        reminder = Reminder(
            target_type=target.target_type,
            target_id=target.target_id,
            due_at=due,
            message=message or "",
        )
        created = await self._store.create(reminder)
        logger.info(
            "reminder_created",
            reminder_id=created.id,
            target=str(target),
            due_at=due.isoformat(),
        )
        return created

    async def get(self, reminder_id: int) -> Reminder:
        reminder = await self._store.get(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(reminder_id)
        return reminder

    async def update(
        self,
        reminder_id: int,
        *,
        due_at: Any = None,
        message: str | None = None,
        is_done: bool | None = None,
    ) -> Reminder:
        """
        Edit a reminder.

        ``is_done`` is applied first so that re-arming sees the final
        done flag. Completing a reminder never stamps ``fired_at``.

        Raises:
            InvalidTimestampError: If ``due_at`` is given but invalid.
            ReminderNotFoundError: If the reminder does not exist.
        """
        new_due = parse_instant(due_at, "dueAt") if due_at is not None else None
        reminder = await self.get(reminder_id)

        if is_done is not None:
            reminder.is_done = is_done
        if message is not None:
            reminder.message = message
        rearm = False
        if new_due is not None:
            rearm = reminder.reschedule(new_due, self._clock())
            if rearm:
                logger.info("reminder_rearmed", reminder_id=reminder_id)

        updated = await self._store.update(reminder, rearm=rearm)
        logger.info("reminder_updated", reminder_id=reminder_id)
        return updated

    async def list_reminders(
        self,
        include_done: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Reminder]:
        """List reminders by due time then id; done ones only on request."""
        return await self._store.list_reminders(
            include_done=include_done, limit=limit, offset=offset
        )

    async def delete(self, reminder_id: int) -> None:
        if not await self._store.delete(reminder_id):
            raise ReminderNotFoundError(reminder_id)
        logger.info("reminder_deleted", reminder_id=reminder_id)

    def clamp_take(self, take: int | None) -> int:
        """Bound a requested batch size into 1..max_take."""
        if take is None:
            take = self._default_take
        return max(1, min(self._max_take, take))

    async def poll_due(
        self,
        now: datetime | None = None,
        limit: int | None = None,
    ) -> list[Reminder]:
        """
        Claim reminders that are due and not yet fired.

        Each returned reminder has ``fired_at == now`` and will not be
        returned again until a future ``due_at`` re-arms it. Not
        idempotent.
        """
        poll_at = ensure_utc(now) if now is not None else self._clock()
        take = self.clamp_take(limit)

        fired = await self._store.claim_due(poll_at, take)
        if fired:
            logger.info(
                "reminders_fired",
                count=len(fired),
                reminder_ids=[r.id for r in fired],
                now=poll_at.isoformat(),
            )
        return fired
