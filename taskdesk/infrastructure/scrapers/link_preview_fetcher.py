"""
Link preview fetcher.

Downloads a page and extracts Open Graph style preview metadata:
title, description, image and favicon. Every failure (network,
status, content type, parsing) yields an empty or partial preview
instead of an exception.
"""

import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urljoin

import httpx

from taskdesk.config import get_logger
from taskdesk.core.entities.link_attachment import LinkPreview
from taskdesk.core.interfaces.link_preview import ILinkPreviewFetcher
from taskdesk.infrastructure.capabilities import load_html_parser

logger = get_logger(__name__)

_DEFAULT_USER_AGENT = "TaskDesk/1.0 (+link-preview)"

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")

# Favicon link relations in priority order
_FAVICON_RELS = ("icon", "shortcut icon", "apple-touch-icon")

_WHITESPACE_RE = re.compile(r"\s+")


def _clean(value: Any, max_length: int | None = None) -> str | None:
    """Collapse whitespace; empty becomes None."""
    if not isinstance(value, str):
        return None
    text = _WHITESPACE_RE.sub(" ", value).strip()
    if not text:
        return None
    if max_length is not None and len(text) > max_length:
        text = text[:max_length].rstrip()
    return text


def _looks_like_html(text: str) -> bool:
    head = text[:1024].lstrip().lower()
    return head.startswith("<!doctype html") or "<html" in head


class HtmlLinkPreviewFetcher(ILinkPreviewFetcher):
    """
    Fetches HTML over httpx and parses it with BeautifulSoup.

    The parser is resolved at construction. Without it the fetcher
    still performs no work and returns an empty preview.
    """

    def __init__(
        self,
        parser: Callable[..., Any] | None = None,
        timeout: float = 10.0,
        user_agent: str = _DEFAULT_USER_AGENT,
        max_title_length: int = 300,
        max_description_length: int = 1000,
    ):
        self._parser = parser if parser is not None else load_html_parser()
        self._timeout = timeout
        self._user_agent = user_agent
        self._max_title_length = max_title_length
        self._max_description_length = max_description_length

    @property
    def available(self) -> bool:
        return self._parser is not None

    async def fetch(self, url: str) -> LinkPreview:
        """Fetch and parse ``url``. Never raises for acquisition failures."""
        if self._parser is None:
            return LinkPreview()

        fetched = await self._fetch_html(url)
        if fetched is None:
            return LinkPreview()

        html, final_url = fetched
        try:
            return self._parse_html(html, final_url)
        except Exception as exc:
            logger.warning("link_preview_parse_failed", url=url, error=str(exc))
            return LinkPreview(final_url=final_url)

    async def _fetch_html(self, url: str) -> tuple[str, str] | None:
        """Return the page body and its final URL after redirects."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5",
                },
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            logger.warning("link_preview_fetch_timeout", url=url, timeout=self._timeout)
            return None
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            logger.warning("link_preview_fetch_failed", url=url, error=str(exc))
            return None

        if not response.is_success:
            logger.warning(
                "link_preview_http_error",
                url=url,
                status_code=response.status_code,
            )
            return None

        content_type = response.headers.get("content-type", "").lower()
        if content_type:
            is_html = any(ct in content_type for ct in _HTML_CONTENT_TYPES)
        else:
            # No header: sniff the start of the body
            is_html = _looks_like_html(response.text)
        if not is_html:
            logger.info("link_preview_not_html", url=url, content_type=content_type)
            return None

        return response.text, str(response.url)

    def _parse_html(self, html: str, final_url: str) -> LinkPreview:
        """Extract preview fields; relative URLs resolve against ``final_url``."""
        soup = self._parser(html, "html.parser")

        title = _clean(self._meta(soup, "og:title"), self._max_title_length)
        if title is None and soup.title is not None:
            title = _clean(soup.title.get_text(), self._max_title_length)

        description = _clean(
            self._meta(soup, "og:description") or self._meta(soup, "description"),
            self._max_description_length,
        )

        image = _clean(self._meta(soup, "og:image") or self._meta(soup, "twitter:image"))
        favicon = _clean(self._favicon_href(soup))

        return LinkPreview(
            title=title,
            description=description,
            image_url=urljoin(final_url, image) if image else None,
            favicon_url=urljoin(final_url, favicon) if favicon else None,
            final_url=final_url,
        )

    @staticmethod
    def _meta(soup: Any, key: str) -> str | None:
        """Content of the first non-empty ``<meta>`` whose property or name is ``key``."""
        for attr in ("property", "name"):
            for tag in soup.find_all("meta", attrs={attr: key}):
                content = tag.get("content")
                if isinstance(content, str) and content.strip():
                    return content
        return None

    @staticmethod
    def _favicon_href(soup: Any) -> str | None:
        hrefs: dict[str, str] = {}
        for tag in soup.find_all("link", href=True):
            rel = tag.get("rel") or []
            # bs4 splits rel into a list of tokens
            rel_value = " ".join(rel if isinstance(rel, list) else [rel]).lower().strip()
            if rel_value in _FAVICON_RELS and rel_value not in hrefs:
                hrefs[rel_value] = tag["href"]

        for rel_value in _FAVICON_RELS:
            if hrefs.get(rel_value, "").strip():
                return hrefs[rel_value]
        return None
