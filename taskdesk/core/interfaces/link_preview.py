"""
Abstract interfaces for acquiring link previews.

Both acquisitions are best-effort: implementations absorb network,
parse and browser failures and report them as missing data.
"""

from abc import ABC, abstractmethod

from taskdesk.core.entities.link_attachment import LinkPreview


class ILinkPreviewFetcher(ABC):
    """Fetches a page and extracts preview metadata."""

    @abstractmethod
    async def fetch(self, url: str) -> LinkPreview:
        """
        Fetch ``url`` and extract its preview fields.

        Args:
            url: Absolute http(s) URL, already validated.

        Returns:
            Extracted preview. Fields the page did not provide, or that
            could not be acquired, are None. Never raises for content
            acquisition failures.
        """


class IScreenshotCapturer(ABC):
    """Captures a screenshot of a page to a local file."""

    @property
    @abstractmethod
    def available(self) -> bool:
        """True when capture is enabled and the browser capability exists."""

    @abstractmethod
    async def capture(self, url: str) -> str | None:
        """
        Capture a viewport screenshot of ``url``.

        Returns:
            File name of the stored PNG, or None when disabled,
            unavailable or failed.
        """
