"""Fixtures for API tests.

Routes run against the real services wired over in-memory stores.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from taskdesk.api.dependencies import get_engine, get_link_service
from taskdesk.api.main import app
from taskdesk.core.entities import Note, Task
from taskdesk.core.services import LinkEnrichmentService, ReminderEngine, TargetResolver
from tests.fakes import (
    InMemoryLinkAttachmentStore,
    InMemoryRecordStore,
    InMemoryReminderStore,
    StubCapturer,
    StubFetcher,
)


@pytest.fixture
async def records() -> InMemoryRecordStore:
    """Record store holding task 1 and note 2."""
    store = InMemoryRecordStore()
    await store.create_task(Task(title="Ship release"))
    await store.create_note(Note(title="Reading list"))
    return store


@pytest.fixture
def engine(records: InMemoryRecordStore) -> ReminderEngine:
    return ReminderEngine(InMemoryReminderStore(), TargetResolver(records))


@pytest.fixture
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def capturer() -> StubCapturer:
    return StubCapturer()


@pytest.fixture
def link_service(
    records: InMemoryRecordStore,
    fetcher: StubFetcher,
    capturer: StubCapturer,
) -> LinkEnrichmentService:
    return LinkEnrichmentService(
        resolver=TargetResolver(records),
        attachment_store=InMemoryLinkAttachmentStore(),
        fetcher=fetcher,
        capturer=capturer,
    )


@pytest.fixture
async def client(
    engine: ReminderEngine,
    link_service: LinkEnrichmentService,
) -> AsyncGenerator[AsyncClient, None]:
    """Async client with service overrides."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_link_service] = lambda: link_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_engine, None)
    app.dependency_overrides.pop(get_link_service, None)
