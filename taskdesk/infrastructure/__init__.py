"""Infrastructure layer implementations."""

from taskdesk.infrastructure import browser, scrapers, storage

__all__ = ["storage", "scrapers", "browser"]
