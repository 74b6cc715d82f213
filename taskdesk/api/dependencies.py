"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Tests replace these
through ``app.dependency_overrides``.
"""

from taskdesk.application.services import get_link_enrichment_service, get_reminder_engine
from taskdesk.config import Settings, get_settings
from taskdesk.core.services import LinkEnrichmentService, ReminderEngine


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


async def get_engine() -> ReminderEngine:
    """Get reminder engine."""
    return await get_reminder_engine()


async def get_link_service() -> LinkEnrichmentService:
    """Get link enrichment service."""
    return await get_link_enrichment_service()
