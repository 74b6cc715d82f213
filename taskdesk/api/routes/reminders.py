"""
Reminder management endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from taskdesk.api.dependencies import get_engine
from taskdesk.application.dto.requests import CreateReminderRequest, UpdateReminderRequest
from taskdesk.application.dto.responses import ErrorResponse, ReminderResponse
from taskdesk.core.clock import utc_now
from taskdesk.core.entities.reminder import Reminder
from taskdesk.core.entities.target import TargetReference
from taskdesk.core.services import ReminderEngine

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _entity_to_response(reminder: Reminder) -> ReminderResponse:
    """Convert entity to response DTO."""
    return ReminderResponse(
        id=reminder.id or 0,
        target_type=reminder.target_type.value,
        target_id=reminder.target_id,
        due_at=reminder.due_at,
        message=reminder.message,
        is_done=reminder.is_done,
        fired_at=reminder.fired_at,
        is_overdue=reminder.is_overdue(utc_now()),
        created_at=reminder.created_at,
        updated_at=reminder.updated_at,
    )


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_reminder(
    request: CreateReminderRequest,
    engine: ReminderEngine = Depends(get_engine),
) -> ReminderResponse:
    """Create a reminder on an existing task or note."""
    target = TargetReference.parse(request.target_type, request.target_id)
    created = await engine.create(target, request.due_at, request.message)
    return _entity_to_response(created)


@router.get(
    "",
    response_model=list[ReminderResponse],
)
async def list_reminders(
    include_done: bool = Query(default=False, alias="includeDone"),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    engine: ReminderEngine = Depends(get_engine),
) -> list[ReminderResponse]:
    """
    List reminders ordered by due time; done ones only on request.

    Without ``limit`` every matching reminder is returned.
    """
    reminders = await engine.list_reminders(
        include_done=include_done, limit=limit, offset=offset
    )
    return [_entity_to_response(r) for r in reminders]


@router.get(
    "/due",
    response_model=list[ReminderResponse],
)
async def poll_due_reminders(
    take: int | None = None,
    engine: ReminderEngine = Depends(get_engine),
) -> list[ReminderResponse]:
    """
    Claim reminders that are due and not yet fired.

    Not idempotent: every returned reminder is marked fired and will
    not be returned by later polls unless its due time is moved into
    the future.
    """
    reminders = await engine.poll_due(limit=engine.clamp_take(take))
    return [_entity_to_response(r) for r in reminders]


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_reminder(
    reminder_id: int,
    engine: ReminderEngine = Depends(get_engine),
) -> ReminderResponse:
    """Get a reminder by ID."""
    return _entity_to_response(await engine.get(reminder_id))


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_reminder(
    reminder_id: int,
    request: UpdateReminderRequest,
    engine: ReminderEngine = Depends(get_engine),
) -> ReminderResponse:
    """Edit due time, message or done flag. A future due time re-arms."""
    updated = await engine.update(
        reminder_id,
        due_at=request.due_at,
        message=request.message,
        is_done=request.is_done,
    )
    return _entity_to_response(updated)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_reminder(
    reminder_id: int,
    engine: ReminderEngine = Depends(get_engine),
) -> None:
    """Delete a reminder."""
    await engine.delete(reminder_id)
