"""
Service factory functions for dependency injection.

Wires the SQLite stores, the HTML fetcher and the screenshot capturer
to the core services. API dependencies import from here.
"""

from typing import TYPE_CHECKING

from taskdesk.config import get_settings
from taskdesk.core.services import LinkEnrichmentService, ReminderEngine, TargetResolver

if TYPE_CHECKING:
    from taskdesk.core.interfaces import (
        ILinkAttachmentStore,
        ILinkPreviewFetcher,
        IRecordStore,
        IReminderStore,
        IScreenshotCapturer,
    )


# Singleton service instances
_target_resolver: TargetResolver | None = None
_reminder_engine: ReminderEngine | None = None
_link_enrichment_service: LinkEnrichmentService | None = None


async def get_target_resolver(
    record_store: "IRecordStore | None" = None,
) -> TargetResolver:
    """Get or create the TargetResolver."""
    global _target_resolver

    if _target_resolver is not None and record_store is None:
        return _target_resolver

    # Lazy import infrastructure to avoid circular imports
    from taskdesk.infrastructure.storage.sqlite import get_record_store

    resolver = TargetResolver(record_store or await get_record_store())
    if record_store is None:
        _target_resolver = resolver
    return resolver


async def get_reminder_engine(
    reminder_store: "IReminderStore | None" = None,
    resolver: TargetResolver | None = None,
) -> ReminderEngine:
    """
    Get or create the ReminderEngine.

    Args:
        reminder_store: Optional reminder store override
        resolver: Optional target resolver override

    Returns:
        Configured ReminderEngine
    """
    global _reminder_engine

    overridden = reminder_store is not None or resolver is not None
    if _reminder_engine is not None and not overridden:
        return _reminder_engine

    from taskdesk.infrastructure.storage.sqlite import get_reminder_store

    settings = get_settings()
    engine = ReminderEngine(
        reminder_store=reminder_store or await get_reminder_store(),
        resolver=resolver or await get_target_resolver(),
        default_take=settings.reminders.poll_default_take,
        max_take=settings.reminders.poll_max_take,
    )
    if not overridden:
        _reminder_engine = engine
    return engine


async def get_link_enrichment_service(
    attachment_store: "ILinkAttachmentStore | None" = None,
    fetcher: "ILinkPreviewFetcher | None" = None,
    capturer: "IScreenshotCapturer | None" = None,
    resolver: TargetResolver | None = None,
) -> LinkEnrichmentService:
    """
    Get or create the LinkEnrichmentService.

    Optional capabilities (HTML parser, headless browser) are resolved
    here, once, when the default fetcher and capturer are built.
    """
    global _link_enrichment_service

    overridden = any(x is not None for x in (attachment_store, fetcher, capturer, resolver))
    if _link_enrichment_service is not None and not overridden:
        return _link_enrichment_service

    from taskdesk.infrastructure.browser import PlaywrightScreenshotCapturer
    from taskdesk.infrastructure.scrapers import HtmlLinkPreviewFetcher
    from taskdesk.infrastructure.storage.sqlite import get_link_attachment_store

    settings = get_settings()
    links = settings.links

    if fetcher is None:
        fetcher = HtmlLinkPreviewFetcher(
            timeout=links.fetch_timeout,
            user_agent=links.user_agent,
            max_title_length=links.max_title_length,
            max_description_length=links.max_description_length,
        )
    if capturer is None:
        capturer = PlaywrightScreenshotCapturer(
            output_dir=settings.storage.screenshot_dir,
            enabled=links.screenshots_enabled,
            timeout_ms=links.screenshot_timeout_ms,
            settle_ms=links.screenshot_settle_ms,
            total_timeout=links.screenshot_total_timeout,
            viewport=(links.viewport_width, links.viewport_height),
        )

    service = LinkEnrichmentService(
        resolver=resolver or await get_target_resolver(),
        attachment_store=attachment_store or await get_link_attachment_store(),
        fetcher=fetcher,
        capturer=capturer,
    )
    if not overridden:
        _link_enrichment_service = service
    return service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _target_resolver, _reminder_engine, _link_enrichment_service
    _target_resolver = None
    _reminder_engine = None
    _link_enrichment_service = None
