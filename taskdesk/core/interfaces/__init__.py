"""Core interfaces (abstract base classes)."""

from taskdesk.core.interfaces.link_preview import ILinkPreviewFetcher, IScreenshotCapturer
from taskdesk.core.interfaces.storage import (
    ILinkAttachmentStore,
    IRecordStore,
    IReminderStore,
)

__all__ = [
    # Storage
    "IRecordStore",
    "IReminderStore",
    "ILinkAttachmentStore",
    # Link previews
    "ILinkPreviewFetcher",
    "IScreenshotCapturer",
]
