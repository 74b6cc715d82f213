"""Web page scrapers."""

from taskdesk.infrastructure.scrapers.link_preview_fetcher import HtmlLinkPreviewFetcher

__all__ = ["HtmlLinkPreviewFetcher"]
