"""SQLite implementation of link attachment storage."""

import aiosqlite

from taskdesk.config import get_logger
from taskdesk.core.clock import from_storage, to_storage, utc_now
from taskdesk.core.entities.link_attachment import LinkAttachment
from taskdesk.core.entities.target import TargetReference, TargetType
from taskdesk.core.exceptions import DatabaseError
from taskdesk.core.interfaces.storage import ILinkAttachmentStore
from taskdesk.infrastructure.storage.sqlite.connection import PooledStore

logger = get_logger(__name__)


class SQLiteLinkAttachmentStore(PooledStore, ILinkAttachmentStore):
    """SQLite implementation of link attachment storage."""

    async def create(self, attachment: LinkAttachment) -> LinkAttachment:
        """Create a new link attachment."""
        try:
            async with self._transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO link_attachments (
                        owner_type, owner_id, url, title, description,
                        image_url, favicon_url, screenshot_path,
                        last_fetched_at, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        attachment.owner_type.value,
                        attachment.owner_id,
                        attachment.url,
                        attachment.title,
                        attachment.description,
                        attachment.image_url,
                        attachment.favicon_url,
                        attachment.screenshot_path,
                        to_storage(attachment.last_fetched_at)
                        if attachment.last_fetched_at
                        else None,
                        to_storage(attachment.created_at),
                        to_storage(attachment.updated_at),
                    ),
                )
                attachment.id = cursor.lastrowid
        except aiosqlite.Error as e:
            raise DatabaseError("create_link_attachment", str(e)) from e
        logger.info(
            "link_attachment_stored",
            link_id=attachment.id,
            owner=str(attachment.owner),
        )
        return attachment

    async def get(self, link_id: int) -> LinkAttachment | None:
        """Get link attachment by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM link_attachments WHERE id = ?", (link_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entity(row)

    async def list_by_owner(self, owner: TargetReference) -> list[LinkAttachment]:
        """List attachments of one owner, most recently updated first."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM link_attachments
                WHERE owner_type = ? AND owner_id = ?
                ORDER BY updated_at DESC, id DESC
                """,
                (owner.target_type.value, owner.target_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entity(row) for row in rows]

    async def delete(self, link_id: int) -> bool:
        """Delete a link attachment by ID."""
        async with self._transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM link_attachments WHERE id = ?", (link_id,)
            )
            return cursor.rowcount > 0

    def _row_to_entity(self, row: aiosqlite.Row) -> LinkAttachment:
        """Convert database row to LinkAttachment entity."""
        return LinkAttachment(
            id=row["id"],
            owner_type=TargetType(row["owner_type"]),
            owner_id=row["owner_id"],
            url=row["url"],
            title=row["title"],
            description=row["description"],
            image_url=row["image_url"],
            favicon_url=row["favicon_url"],
            screenshot_path=row["screenshot_path"],
            last_fetched_at=from_storage(row["last_fetched_at"]),
            created_at=from_storage(row["created_at"]) or utc_now(),
            updated_at=from_storage(row["updated_at"]) or utc_now(),
        )
