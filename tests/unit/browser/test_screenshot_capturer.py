"""Unit tests for PlaywrightScreenshotCapturer and capability loading."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from taskdesk.infrastructure import capabilities
from taskdesk.infrastructure.browser.screenshot_capturer import (
    PlaywrightScreenshotCapturer,
    screenshot_filename,
)


def _browser_factory(page: AsyncMock | None = None):
    """Build a fake ``async_playwright`` factory around a mock page."""
    page = page or AsyncMock()

    browser = AsyncMock()
    browser.new_page = AsyncMock(return_value=page)

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    context = AsyncMock()
    context.__aenter__ = AsyncMock(return_value=playwright)
    context.__aexit__ = AsyncMock(return_value=False)

    return MagicMock(return_value=context), browser, page


class TestScreenshotFilename:
    def test_hex_png(self):
        name = screenshot_filename("https://example.com", "2026-05-01T12:00:00+00:00")
        assert name.endswith(".png")
        assert len(name) == 64 + len(".png")
        int(name[:-4], 16)

    def test_varies_with_capture_time(self):
        first = screenshot_filename("https://example.com", "2026-05-01T12:00:00+00:00")
        second = screenshot_filename("https://example.com", "2026-05-01T12:00:01+00:00")
        assert first != second


class TestCapture:
    async def test_disabled_returns_none(self, tmp_path):
        factory, _, _ = _browser_factory()
        capturer = PlaywrightScreenshotCapturer(tmp_path, enabled=False, browser_factory=factory)

        assert capturer.available is False
        assert await capturer.capture("https://example.com") is None
        factory.assert_not_called()

    async def test_enabled_without_playwright(self, tmp_path):
        with patch(
            "taskdesk.infrastructure.browser.screenshot_capturer.load_browser",
            return_value=None,
        ):
            capturer = PlaywrightScreenshotCapturer(tmp_path, enabled=True)

        assert capturer.available is False
        assert await capturer.capture("https://example.com") is None

    async def test_success(self, tmp_path):
        factory, browser, page = _browser_factory()
        capturer = PlaywrightScreenshotCapturer(
            tmp_path, enabled=True, browser_factory=factory, settle_ms=0
        )

        filename = await capturer.capture("https://example.com")

        assert filename is not None
        assert filename.endswith(".png")
        page.goto.assert_awaited_once()
        assert page.goto.await_args.args[0] == "https://example.com"
        page.screenshot.assert_awaited_once_with(
            path=str(tmp_path / filename), full_page=False
        )
        browser.close.assert_awaited_once()

    async def test_navigation_failure_closes_browser(self, tmp_path):
        page = AsyncMock()
        page.goto = AsyncMock(side_effect=RuntimeError("net::ERR_NAME_NOT_RESOLVED"))
        factory, browser, _ = _browser_factory(page)
        capturer = PlaywrightScreenshotCapturer(tmp_path, enabled=True, browser_factory=factory)

        assert await capturer.capture("https://unreachable.invalid") is None
        browser.close.assert_awaited_once()

    async def test_overall_timeout(self, tmp_path):
        async def hang(*args, **kwargs):
            await asyncio.sleep(10)

        page = AsyncMock()
        page.goto = AsyncMock(side_effect=hang)
        factory, browser, _ = _browser_factory(page)
        capturer = PlaywrightScreenshotCapturer(
            tmp_path, enabled=True, browser_factory=factory, total_timeout=0.05
        )

        assert await capturer.capture("https://slow.example.com") is None
        browser.close.assert_awaited_once()


class TestCapabilities:
    def test_html_parser_available(self):
        from bs4 import BeautifulSoup

        assert capabilities.load_html_parser() is BeautifulSoup

    def test_missing_module_returns_none(self):
        with patch(
            "taskdesk.infrastructure.capabilities.importlib.import_module",
            side_effect=ImportError("No module named 'playwright'"),
        ):
            assert capabilities.load_browser() is None
