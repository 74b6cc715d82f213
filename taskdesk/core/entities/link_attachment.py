"""Link attachment entity with best-effort preview fields."""

from datetime import datetime

from pydantic import BaseModel, Field

from taskdesk.core.clock import utc_now
from taskdesk.core.entities.target import TargetReference, TargetType


class LinkPreview(BaseModel):
    """
    Preview metadata extracted from a web page.

    Every field is optional; an empty preview is a normal outcome.
    """

    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    favicon_url: str | None = None
    final_url: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any((self.title, self.description, self.image_url, self.favicon_url))


class LinkAttachment(BaseModel):
    """
    URL attached to a task or a note.

    Records what the user pointed to; the enrichment fields are
    filled when the page could be fetched and parsed.
    """

    id: int | None = None
    owner_type: TargetType
    owner_id: int
    url: str
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    favicon_url: str | None = None
    screenshot_path: str | None = None
    last_fetched_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def owner(self) -> TargetReference:
        return TargetReference(target_type=self.owner_type, target_id=self.owner_id)

    def apply_preview(self, preview: LinkPreview) -> None:
        self.title = preview.title
        self.description = preview.description
        self.image_url = preview.image_url
        self.favicon_url = preview.favicon_url
