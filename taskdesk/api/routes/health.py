"""
Health check and backup endpoints.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from taskdesk.api.dependencies import get_app_settings
from taskdesk.application.dto.responses import ErrorResponse, HealthResponse
from taskdesk.config import Settings, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Health check.

    Returns service status, uptime and whether the database answers.
    """
    from taskdesk.infrastructure.storage.sqlite import get_pool

    database = "healthy"
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=database,
        screenshots=settings.links.screenshots_enabled,
    )


@router.get(
    "/backup",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
)
async def download_backup(settings: Settings = Depends(get_app_settings)) -> FileResponse:
    """Download the current SQLite database file."""
    db_path = settings.storage.db_path
    if not db_path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Database file not found",
        )
    logger.info("database_backup_downloaded", db_path=str(db_path))
    return FileResponse(
        db_path,
        media_type="application/octet-stream",
        filename=settings.storage.db_name,
        headers={"Cache-Control": "no-store"},
    )
