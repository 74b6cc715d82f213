"""Tests for LinkAttachment and LinkPreview entities."""

from taskdesk.core.entities.link_attachment import LinkAttachment, LinkPreview
from taskdesk.core.entities.target import TargetType


class TestLinkPreview:
    def test_empty(self):
        assert LinkPreview().is_empty
        assert LinkPreview(final_url="https://example.com/").is_empty

    def test_not_empty(self):
        assert not LinkPreview(favicon_url="https://example.com/favicon.ico").is_empty


class TestLinkAttachment:
    def test_apply_preview(self):
        link = LinkAttachment(owner_type=TargetType.NOTE, owner_id=2, url="https://example.com")
        link.apply_preview(
            LinkPreview(
                title="Example",
                description="An example page",
                image_url="https://example.com/og.png",
                favicon_url="https://example.com/favicon.ico",
            )
        )
        assert link.title == "Example"
        assert link.description == "An example page"
        assert link.image_url == "https://example.com/og.png"
        assert link.favicon_url == "https://example.com/favicon.ico"
        assert link.screenshot_path is None
        assert str(link.owner) == "NOTE#2"
