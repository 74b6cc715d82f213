"""
Link attachment endpoints.

Attach URLs to tasks and notes, preview a URL without saving it and
serve captured screenshots.
"""

import re

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from taskdesk.api.dependencies import get_app_settings, get_link_service
from taskdesk.application.dto.requests import CreateLinkRequest
from taskdesk.application.dto.responses import (
    ErrorResponse,
    LinkAttachmentResponse,
    LinkPreviewResponse,
)
from taskdesk.config import Settings
from taskdesk.core.entities.link_attachment import LinkAttachment
from taskdesk.core.entities.target import TargetReference, TargetType
from taskdesk.core.services import LinkEnrichmentService

router = APIRouter(prefix="/api", tags=["links"])

SCREENSHOT_ROUTE = "/api/screenshots"

_SCREENSHOT_NAME_RE = re.compile(r"^[0-9a-f]{16,64}\.png$")


def _screenshot_url(filename: str | None) -> str | None:
    return f"{SCREENSHOT_ROUTE}/{filename}" if filename else None


def _entity_to_response(link: LinkAttachment) -> LinkAttachmentResponse:
    """Convert entity to response DTO."""
    return LinkAttachmentResponse(
        id=link.id or 0,
        owner_type=link.owner_type.value,
        owner_id=link.owner_id,
        url=link.url,
        title=link.title,
        description=link.description,
        image_url=link.image_url,
        favicon_url=link.favicon_url,
        screenshot_path=link.screenshot_path,
        screenshot_url=_screenshot_url(link.screenshot_path),
        last_fetched_at=link.last_fetched_at,
        created_at=link.created_at,
        updated_at=link.updated_at,
    )


async def _attach(
    service: LinkEnrichmentService,
    owner_type: TargetType,
    owner_id: int,
    request: CreateLinkRequest,
) -> LinkAttachmentResponse:
    owner = TargetReference.parse(owner_type, owner_id, type_field="ownerType", id_field="ownerId")
    created = await service.enrich(owner, request.url)
    return _entity_to_response(created)


async def _list(
    service: LinkEnrichmentService,
    owner_type: TargetType,
    owner_id: int,
) -> list[LinkAttachmentResponse]:
    owner = TargetReference.parse(owner_type, owner_id, type_field="ownerType", id_field="ownerId")
    links = await service.list_for_owner(owner)
    return [_entity_to_response(link) for link in links]


@router.post(
    "/tasks/{task_id}/links",
    response_model=LinkAttachmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def attach_task_link(
    task_id: int,
    request: CreateLinkRequest,
    service: LinkEnrichmentService = Depends(get_link_service),
) -> LinkAttachmentResponse:
    """Attach a URL to a task with whatever preview data is available."""
    return await _attach(service, TargetType.TASK, task_id, request)


@router.post(
    "/notes/{note_id}/links",
    response_model=LinkAttachmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def attach_note_link(
    note_id: int,
    request: CreateLinkRequest,
    service: LinkEnrichmentService = Depends(get_link_service),
) -> LinkAttachmentResponse:
    """Attach a URL to a note with whatever preview data is available."""
    return await _attach(service, TargetType.NOTE, note_id, request)


@router.get("/tasks/{task_id}/links", response_model=list[LinkAttachmentResponse])
async def list_task_links(
    task_id: int,
    service: LinkEnrichmentService = Depends(get_link_service),
) -> list[LinkAttachmentResponse]:
    """List links attached to a task, newest first."""
    return await _list(service, TargetType.TASK, task_id)


@router.get("/notes/{note_id}/links", response_model=list[LinkAttachmentResponse])
async def list_note_links(
    note_id: int,
    service: LinkEnrichmentService = Depends(get_link_service),
) -> list[LinkAttachmentResponse]:
    """List links attached to a note, newest first."""
    return await _list(service, TargetType.NOTE, note_id)


@router.get(
    "/link-preview",
    response_model=LinkPreviewResponse,
    responses={400: {"model": ErrorResponse}},
)
async def preview_link(
    url: str = Query(..., description="Absolute http(s) URL"),
    service: LinkEnrichmentService = Depends(get_link_service),
) -> LinkPreviewResponse:
    """Fetch preview metadata for a URL without saving anything."""
    enriched = await service.preview(url)
    preview = enriched.preview
    return LinkPreviewResponse(
        url=enriched.url,
        final_url=preview.final_url,
        title=preview.title,
        description=preview.description,
        image_url=preview.image_url,
        favicon_url=preview.favicon_url,
        screenshot_path=enriched.screenshot_path,
        screenshot_url=_screenshot_url(enriched.screenshot_path),
        fetched_at=enriched.fetched_at,
    )


@router.delete(
    "/links/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_link(
    link_id: int,
    service: LinkEnrichmentService = Depends(get_link_service),
) -> None:
    """Delete a link attachment."""
    await service.delete(link_id)


@router.get(
    "/screenshots/{filename}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_screenshot(
    filename: str,
    settings: Settings = Depends(get_app_settings),
) -> FileResponse:
    """Serve a captured screenshot by file name."""
    path = settings.storage.screenshot_dir / filename
    if not _SCREENSHOT_NAME_RE.match(filename) or not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Screenshot not found: {filename}",
        )
    return FileResponse(path, media_type="image/png")
