"""Polymorphic reference to a task or a note."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from taskdesk.core.exceptions import InvalidTargetError


class TargetType(str, Enum):
    """Kind of record a reminder or link points at."""

    TASK = "TASK"
    NOTE = "NOTE"


class TargetReference(BaseModel):
    """
    Tagged reference naming either a task or a note.

    Not a foreign key: the referenced row may be deleted later,
    which leaves the reference dangling.
    """

    model_config = ConfigDict(frozen=True)

    target_type: TargetType
    target_id: int

    @classmethod
    def parse(
        cls,
        target_type: Any,
        target_id: Any,
        *,
        type_field: str = "targetType",
        id_field: str = "targetId",
    ) -> "TargetReference":
        """
        Build a reference from untrusted input.

        Raises:
            InvalidTargetError: If the type is not TASK/NOTE or the id
                is not a positive integer.
        """
        if not isinstance(target_type, (str, TargetType)) or not str(target_type).strip():
            raise InvalidTargetError(type_field, "is required (TASK or NOTE)", target_type)
        try:
            kind = TargetType(str(getattr(target_type, "value", target_type)).strip().upper())
        except ValueError as exc:
            raise InvalidTargetError(type_field, "must be TASK or NOTE", target_type) from exc

        if isinstance(target_id, bool) or not isinstance(target_id, int):
            raise InvalidTargetError(id_field, "must be a positive integer", target_id)
        if target_id <= 0:
            raise InvalidTargetError(id_field, "must be a positive integer", target_id)

        return cls(target_type=kind, target_id=target_id)

    def __str__(self) -> str:
        return f"{self.target_type.value}#{self.target_id}"


class ResolvedTarget(BaseModel):
    """A reference that was found in the record store."""

    ref: TargetReference
    title: str
