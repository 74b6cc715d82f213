"""UTC time helpers shared by entities, services and stores."""

from datetime import UTC, datetime
from typing import Any

from taskdesk.core.exceptions import InvalidTimestampError


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_instant(value: Any, field: str = "dueAt") -> datetime:
    """
    Parse an ISO-8601 date-time into an aware UTC datetime.

    Accepts datetimes as-is and strings with or without an offset
    (a trailing ``Z`` is accepted). Naive values are read as UTC.

    Raises:
        InvalidTimestampError: If the value is missing, unparseable or
            cannot be represented in UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidTimestampError(field, value) from exc
    else:
        raise InvalidTimestampError(field, value)
    # Offsets at the edges of the calendar overflow when shifted to UTC
    try:
        return ensure_utc(parsed)
    except OverflowError as exc:
        raise InvalidTimestampError(field, value) from exc


def to_storage(value: datetime) -> str:
    """
    Serialize a datetime for SQLite.

    Fixed-width UTC text so that lexical comparison in SQL matches
    chronological order.
    """
    return ensure_utc(value).isoformat(timespec="microseconds")


def from_storage(value: str | None) -> datetime | None:
    """Deserialize a timestamp column written by ``to_storage``."""
    if not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except (ValueError, TypeError):
        return None
