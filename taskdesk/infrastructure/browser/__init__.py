"""Headless browser integrations."""

from taskdesk.infrastructure.browser.screenshot_capturer import (
    PlaywrightScreenshotCapturer,
    screenshot_filename,
)

__all__ = ["PlaywrightScreenshotCapturer", "screenshot_filename"]
