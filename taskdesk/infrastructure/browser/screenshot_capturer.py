"""
Headless browser screenshot capture.

Runs only when screenshots are enabled and playwright is installed.
The browser is always closed, and the whole capture is bounded by an
overall timeout on top of the navigation timeout.
"""

import asyncio
import hashlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from taskdesk.config import get_logger
from taskdesk.core.clock import utc_now
from taskdesk.core.interfaces.link_preview import IScreenshotCapturer
from taskdesk.infrastructure.capabilities import load_browser

logger = get_logger(__name__)


def screenshot_filename(url: str, captured_at: str) -> str:
    """Content-addressed file name for one capture of ``url``."""
    digest = hashlib.sha256(f"{url}{captured_at}".encode()).hexdigest()
    return f"{digest}.png"


class PlaywrightScreenshotCapturer(IScreenshotCapturer):
    """Screenshot capturer backed by headless Chromium."""

    def __init__(
        self,
        output_dir: Path,
        enabled: bool = False,
        browser_factory: Callable[[], Any] | None = None,
        timeout_ms: int = 15000,
        settle_ms: int = 1000,
        total_timeout: float = 30.0,
        viewport: tuple[int, int] = (1280, 720),
    ):
        self._output_dir = output_dir
        self._enabled = enabled
        # Resolve the browser only when it can be used
        if browser_factory is None and enabled:
            browser_factory = load_browser()
        self._browser_factory = browser_factory
        self._timeout_ms = timeout_ms
        self._settle_ms = settle_ms
        self._total_timeout = total_timeout
        self._viewport = {"width": viewport[0], "height": viewport[1]}

    @property
    def available(self) -> bool:
        return self._enabled and self._browser_factory is not None

    async def capture(self, url: str) -> str | None:
        if not self.available:
            return None

        try:
            filename = await asyncio.wait_for(
                self._capture(url), timeout=self._total_timeout
            )
        except TimeoutError:
            logger.warning("screenshot_timeout", url=url, timeout=self._total_timeout)
            return None
        except Exception as exc:
            logger.warning("screenshot_failed", url=url, error=str(exc))
            return None

        logger.info("screenshot_captured", url=url, filename=filename)
        return filename

    async def _capture(self, url: str) -> str:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        filename = screenshot_filename(url, utc_now().isoformat())
        path = self._output_dir / filename

        async with self._browser_factory() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            try:
                page = await browser.new_page(viewport=self._viewport)
                await page.goto(url, wait_until="load", timeout=self._timeout_ms)
                await page.wait_for_timeout(self._settle_ms)
                await page.screenshot(path=str(path), full_page=False)
            finally:
                await browser.close()

        return filename
