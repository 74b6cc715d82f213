"""Tests for TargetResolver."""

import pytest

from taskdesk.core.entities import Note, Task, TargetReference, TargetType
from taskdesk.core.exceptions import TargetNotFoundError
from taskdesk.core.services import TargetResolver
from tests.fakes import InMemoryRecordStore


@pytest.fixture
async def records() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    await store.create_task(Task(title="Ship release"))
    await store.create_note(Note(title="Meeting notes"))
    return store


class TestTargetResolver:
    async def test_resolves_task(self, records: InMemoryRecordStore):
        resolver = TargetResolver(records)
        resolved = await resolver.resolve(TargetReference(target_type=TargetType.TASK, target_id=1))
        assert resolved is not None
        assert resolved.title == "Ship release"

    async def test_resolves_note(self, records: InMemoryRecordStore):
        resolver = TargetResolver(records)
        resolved = await resolver.resolve(TargetReference(target_type=TargetType.NOTE, target_id=2))
        assert resolved.title == "Meeting notes"

    async def test_dispatches_on_type(self, records: InMemoryRecordStore):
        # id 2 is a note, not a task
        resolver = TargetResolver(records)
        assert await resolver.resolve(TargetReference(target_type=TargetType.TASK, target_id=2)) is None

    async def test_require_raises(self, records: InMemoryRecordStore):
        resolver = TargetResolver(records)
        with pytest.raises(TargetNotFoundError) as exc_info:
            await resolver.require(TargetReference(target_type=TargetType.NOTE, target_id=99))
        assert exc_info.value.details == {"target_type": "NOTE", "target_id": 99}
