"""
Domain exceptions for the TaskDesk application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class TaskDeskError(Exception):
    """Base exception for all TaskDesk errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(TaskDeskError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidUrlError(ValidationError):
    """URL is not an absolute http(s) URL."""

    def __init__(self, url: Any, reason: str = "must be an absolute http(s) URL"):
        super().__init__(field="url", message=reason, value=url)
        self.code = "INVALID_URL"


class InvalidTimestampError(ValidationError):
    """Value does not parse as an instant."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            field=field,
            message="must be an ISO-8601 date-time",
            value=value,
        )
        self.code = "INVALID_TIMESTAMP"


class InvalidTargetError(ValidationError):
    """Target type or id is malformed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(field=field, message=message, value=value)
        self.code = "INVALID_TARGET"


# Lookup Exceptions
class NotFoundError(TaskDeskError):
    """Base exception for missing resources."""

    pass


class TargetNotFoundError(NotFoundError):
    """Task or note referenced by a reminder or link does not exist."""

    def __init__(self, target_type: str, target_id: int):
        super().__init__(
            f"Target not found: {target_type} #{target_id}",
            code="TARGET_NOT_FOUND",
            details={"target_type": target_type, "target_id": target_id},
        )


class ReminderNotFoundError(NotFoundError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: int):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": reminder_id},
        )


class LinkAttachmentNotFoundError(NotFoundError):
    """Link attachment not found in storage."""

    def __init__(self, link_id: int):
        super().__init__(
            f"Link not found: {link_id}",
            code="LINK_NOT_FOUND",
            details={"link_id": link_id},
        )


# Storage Exceptions
class StorageError(TaskDeskError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(TaskDeskError):
    """Configuration error."""

    pass
