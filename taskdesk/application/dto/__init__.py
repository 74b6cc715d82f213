"""Request and response DTOs."""

from taskdesk.application.dto.requests import (
    CamelModel,
    CreateLinkRequest,
    CreateReminderRequest,
    UpdateReminderRequest,
)
from taskdesk.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    LinkAttachmentResponse,
    LinkPreviewResponse,
    ReminderResponse,
)

__all__ = [
    # Requests
    "CamelModel",
    "CreateReminderRequest",
    "UpdateReminderRequest",
    "CreateLinkRequest",
    # Responses
    "ReminderResponse",
    "LinkAttachmentResponse",
    "LinkPreviewResponse",
    "HealthResponse",
    "ErrorResponse",
]
