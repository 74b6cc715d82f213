"""
Application layer - DTOs and service factories.

API handlers obtain core services through the factories in
``taskdesk.application.services`` and speak the DTOs defined here.
"""

from taskdesk.application.dto import (
    CreateLinkRequest,
    CreateReminderRequest,
    ErrorResponse,
    HealthResponse,
    LinkAttachmentResponse,
    LinkPreviewResponse,
    ReminderResponse,
    UpdateReminderRequest,
)
from taskdesk.application.services import (
    get_link_enrichment_service,
    get_reminder_engine,
    get_target_resolver,
    reset_services,
)

__all__ = [
    # DTOs
    "CreateReminderRequest",
    "UpdateReminderRequest",
    "CreateLinkRequest",
    "ReminderResponse",
    "LinkAttachmentResponse",
    "LinkPreviewResponse",
    "HealthResponse",
    "ErrorResponse",
    # Factories
    "get_target_resolver",
    "get_reminder_engine",
    "get_link_enrichment_service",
    "reset_services",
]
