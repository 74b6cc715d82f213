"""Request DTOs for API endpoints.

Pydantic v2 models for API request bodies. Field names are camelCase
on the wire. Target, timestamp and URL fields are loosely typed here
and validated by the core services, which report field-level errors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for DTOs exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateReminderRequest(CamelModel):
    """Request to create a reminder on a task or note."""

    target_type: Any = Field(
        default=None,
        description="Kind of record the reminder points at",
        examples=["TASK", "NOTE"],
    )
    target_id: Any = Field(
        default=None,
        description="ID of the task or note",
        examples=[1],
    )
    due_at: Any = Field(
        default=None,
        description="ISO-8601 instant the reminder becomes due",
        examples=["2026-05-01T09:00:00Z"],
    )
    message: str = Field(default="", description="Text shown when the reminder fires")


class UpdateReminderRequest(CamelModel):
    """Partial update of a reminder. Omitted fields are left unchanged."""

    due_at: Any = Field(default=None, description="New due instant")
    message: str | None = Field(default=None, description="New message")
    is_done: bool | None = Field(default=None, description="Completion flag")


class CreateLinkRequest(CamelModel):
    """Request to attach a URL to a task or note."""

    url: Any = Field(
        default=None,
        description="Absolute http(s) URL",
        examples=["https://example.com/article"],
    )
