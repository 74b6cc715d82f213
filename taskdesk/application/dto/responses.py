"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Domain payloads
are camelCase; the error envelope keeps its snake_case keys.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from taskdesk.application.dto.requests import CamelModel


class ReminderResponse(CamelModel):
    """Reminder response DTO."""

    id: int = Field(..., description="Reminder ID")
    target_type: str = Field(..., description="TASK or NOTE")
    target_id: int = Field(..., description="Referenced task or note ID")
    due_at: datetime = Field(..., description="Due instant (UTC)")
    message: str = Field(default="", description="Reminder text")
    is_done: bool = Field(default=False, description="Completion flag")
    fired_at: datetime | None = Field(default=None, description="When a poll delivered it")
    is_overdue: bool = Field(default=False, description="Past due and not done")
    created_at: datetime
    updated_at: datetime


class LinkAttachmentResponse(CamelModel):
    """Link attachment response DTO."""

    id: int
    owner_type: str
    owner_id: int
    url: str
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    favicon_url: str | None = None
    screenshot_path: str | None = None
    screenshot_url: str | None = Field(
        default=None, description="Route serving the screenshot file"
    )
    last_fetched_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class LinkPreviewResponse(CamelModel):
    """Preview of a URL that is not persisted."""

    url: str
    final_url: str | None = None
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    favicon_url: str | None = None
    screenshot_path: str | None = None
    screenshot_url: str | None = None
    fetched_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str = "unknown"
    screenshots: bool = False


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
