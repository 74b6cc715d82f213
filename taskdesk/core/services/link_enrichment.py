"""
Link enrichment service.

Turns a user-supplied URL into a link attachment with preview metadata
and, when enabled, a screenshot. Only three things can fail the
operation: a malformed URL, a missing owner, and the database write.
Everything about the remote page is best-effort and degrades to None.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime
from urllib.parse import urlparse

from taskdesk.config import get_logger
from taskdesk.core.clock import utc_now
from taskdesk.core.entities.link_attachment import LinkAttachment, LinkPreview
from taskdesk.core.entities.target import TargetReference
from taskdesk.core.exceptions import InvalidUrlError, LinkAttachmentNotFoundError
from taskdesk.core.interfaces.link_preview import ILinkPreviewFetcher, IScreenshotCapturer
from taskdesk.core.interfaces.storage import ILinkAttachmentStore
from taskdesk.core.services.target_resolver import TargetResolver

logger = get_logger(__name__)

_ALLOWED_SCHEMES = ("http", "https")

MAX_URL_LENGTH = 8192


def validate_link_url(url: object) -> str:
    """
    Check that ``url`` is an absolute http(s) URL with a host.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        InvalidUrlError: Otherwise. No network access is attempted.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError(url, "is required")

    candidate = url.strip()
    if len(candidate) > MAX_URL_LENGTH:
        raise InvalidUrlError(candidate[:100], f"must be at most {MAX_URL_LENGTH} characters")
    if any(ch.isspace() or not ch.isprintable() for ch in candidate):
        raise InvalidUrlError(candidate, "must not contain whitespace or control characters")

    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
        # Raises for non-numeric or out-of-range ports
        parsed.port
    except ValueError as exc:
        raise InvalidUrlError(candidate) from exc

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not hostname:
        raise InvalidUrlError(candidate)
    return candidate


class EnrichedLink:
    """Result of acquiring a URL's preview and screenshot."""

    def __init__(
        self,
        url: str,
        preview: LinkPreview,
        screenshot_path: str | None,
        fetched_at: datetime,
    ):
        self.url = url
        self.preview = preview
        self.screenshot_path = screenshot_path
        self.fetched_at = fetched_at


class LinkEnrichmentService:
    """
    Service for attaching enriched links to tasks and notes.

    Pure service: fetcher, capturer and stores are injected. Optional
    capabilities are resolved by the implementations at construction,
    so "not installed" and "failed" look the same from here.
    """

    def __init__(
        self,
        resolver: TargetResolver,
        attachment_store: ILinkAttachmentStore,
        fetcher: ILinkPreviewFetcher,
        capturer: IScreenshotCapturer,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._resolver = resolver
        self._store = attachment_store
        self._fetcher = fetcher
        self._capturer = capturer
        self._clock = clock

    async def preview(self, url: str) -> EnrichedLink:
        """
        Acquire preview metadata and screenshot without persisting.

        Raises:
            InvalidUrlError: If the URL is malformed.
        """
        url = validate_link_url(url)
        return await self._acquire(url)

    async def enrich(self, owner: TargetReference, url: str) -> LinkAttachment:
        """
        Attach ``url`` to a task or note with whatever preview data
        could be acquired.

        Raises:
            InvalidUrlError: If the URL is malformed.
            TargetNotFoundError: If the owner does not exist.
            StorageError: If the attachment could not be saved.
        """
        url = validate_link_url(url)
        await self._resolver.require(owner)

        enriched = await self._acquire(url)
        attachment = LinkAttachment(
            owner_type=owner.target_type,
            owner_id=owner.target_id,
            url=url,
            screenshot_path=enriched.screenshot_path,
            last_fetched_at=enriched.fetched_at,
        )
        attachment.apply_preview(enriched.preview)

        created = await self._store.create(attachment)
        logger.info(
            "link_attached",
            link_id=created.id,
            owner=str(owner),
            url=url,
            has_title=created.title is not None,
            has_screenshot=created.screenshot_path is not None,
        )
        return created

    async def list_for_owner(self, owner: TargetReference) -> list[LinkAttachment]:
        return await self._store.list_by_owner(owner)

    async def delete(self, link_id: int) -> None:
        if not await self._store.delete(link_id):
            raise LinkAttachmentNotFoundError(link_id)
        logger.info("link_deleted", link_id=link_id)

    async def _acquire(self, url: str) -> EnrichedLink:
        """Run metadata fetch and screenshot capture side by side."""
        preview, screenshot_path = await asyncio.gather(
            self._fetcher.fetch(url),
            self._capturer.capture(url),
        )
        if preview.is_empty:
            logger.info("link_preview_empty", url=url)
        return EnrichedLink(
            url=url,
            preview=preview,
            screenshot_path=screenshot_path,
            fetched_at=self._clock(),
        )
