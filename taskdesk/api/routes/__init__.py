"""API route modules."""

from taskdesk.api.routes.health import router as health_router
from taskdesk.api.routes.links import router as links_router
from taskdesk.api.routes.reminders import router as reminders_router

__all__ = [
    "health_router",
    "reminders_router",
    "links_router",
]
