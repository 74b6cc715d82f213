"""
Optional runtime capabilities.

Each loader resolves a library once and returns None when it cannot be
imported, so callers treat "not installed" like any other acquisition
failure.
"""

import importlib
from collections.abc import Callable
from typing import Any

from taskdesk.config import get_logger

logger = get_logger(__name__)


def _load(module_name: str, attribute: str) -> Any | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.info("capability_unavailable", module=module_name, error=str(e))
        return None
    return getattr(module, attribute, None)


def load_html_parser() -> Callable[..., Any] | None:
    """Return the ``BeautifulSoup`` constructor, or None."""
    return _load("bs4", "BeautifulSoup")


def load_browser() -> Callable[..., Any] | None:
    """
    Return playwright's ``async_playwright`` factory, or None.

    Playwright ships as the ``screenshots`` extra.
    """
    return _load("playwright.async_api", "async_playwright")
