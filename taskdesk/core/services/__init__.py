"""Core business services."""

from taskdesk.core.services.link_enrichment import (
    EnrichedLink,
    LinkEnrichmentService,
    validate_link_url,
)
from taskdesk.core.services.reminder_engine import ReminderEngine
from taskdesk.core.services.target_resolver import TargetResolver

__all__ = [
    "TargetResolver",
    "ReminderEngine",
    "LinkEnrichmentService",
    "EnrichedLink",
    "validate_link_url",
]
