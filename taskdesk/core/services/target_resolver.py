"""
Target resolution service.

Checks that a task/note reference points at a live record before an
auxiliary row (reminder, link attachment) is created against it.
"""

from collections.abc import Awaitable, Callable

from taskdesk.config import get_logger
from taskdesk.core.entities.record import Note, Task
from taskdesk.core.entities.target import ResolvedTarget, TargetReference, TargetType
from taskdesk.core.exceptions import TargetNotFoundError
from taskdesk.core.interfaces.storage import IRecordStore

logger = get_logger(__name__)


class TargetResolver:
    """
    Resolves task/note references against the record store.

    Lookup dispatches on the reference tag; tasks and notes live in
    separate tables with no shared supertype.
    """

    def __init__(self, record_store: IRecordStore):
        self._records = record_store
        self._lookups: dict[TargetType, Callable[[int], Awaitable[Task | Note | None]]] = {
            TargetType.TASK: record_store.get_task,
            TargetType.NOTE: record_store.get_note,
        }

    async def resolve(self, ref: TargetReference) -> ResolvedTarget | None:
        """Return the resolved target, or None if no such record exists."""
        record = await self._lookups[ref.target_type](ref.target_id)
        if record is None:
            return None
        return ResolvedTarget(ref=ref, title=record.title)

    async def require(self, ref: TargetReference) -> ResolvedTarget:
        """
        Resolve a reference or fail.

        Raises:
            TargetNotFoundError: If the record does not exist.
        """
        resolved = await self.resolve(ref)
        if resolved is None:
            logger.info("target_not_found", target=str(ref))
            raise TargetNotFoundError(ref.target_type.value, ref.target_id)
        return resolved
