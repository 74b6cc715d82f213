"""API tests for link attachment and screenshot endpoints."""

from pathlib import Path

from httpx import AsyncClient

from taskdesk.core.entities import LinkPreview
from tests.fakes import StubCapturer, StubFetcher

SHOT = "ab" * 32 + ".png"


class TestAttachLink:
    async def test_attach_to_task(self, client: AsyncClient, fetcher: StubFetcher):
        fetcher.preview = LinkPreview(
            title="Example Domain",
            favicon_url="https://example.com/favicon.ico",
        )

        response = await client.post("/api/tasks/1/links", json={"url": "https://example.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["ownerType"] == "TASK"
        assert data["ownerId"] == 1
        assert data["title"] == "Example Domain"
        assert data["faviconUrl"] == "https://example.com/favicon.ico"
        assert data["screenshotPath"] is None
        assert data["screenshotUrl"] is None
        assert data["lastFetchedAt"] is not None

    async def test_attach_with_screenshot(self, client: AsyncClient, capturer: StubCapturer):
        capturer.enabled = True
        capturer.filename = SHOT

        response = await client.post("/api/notes/2/links", json={"url": "https://example.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["ownerType"] == "NOTE"
        assert data["screenshotPath"] == SHOT
        assert data["screenshotUrl"] == f"/api/screenshots/{SHOT}"

    async def test_unreachable_page_still_saved(self, client: AsyncClient):
        response = await client.post(
            "/api/tasks/1/links", json={"url": "https://unreachable.invalid/"}
        )
        assert response.status_code == 201
        assert response.json()["title"] is None

        listed = await client.get("/api/tasks/1/links")
        assert len(listed.json()) == 1

    async def test_invalid_url(self, client: AsyncClient, fetcher: StubFetcher):
        response = await client.post("/api/tasks/1/links", json={"url": "not a url"})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_URL"
        assert data["detail"] == "url"
        assert fetcher.calls == []

        listed = await client.get("/api/tasks/1/links")
        assert len(listed.json()) == 0

    async def test_missing_owner(self, client: AsyncClient):
        response = await client.post("/api/notes/99/links", json={"url": "https://example.com"})
        assert response.status_code == 404
        assert response.json()["error_code"] == "TARGET_NOT_FOUND"

    async def test_non_positive_owner_id(self, client: AsyncClient):
        response = await client.post("/api/tasks/0/links", json={"url": "https://example.com"})
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_TARGET"
        assert data["detail"] == "ownerId"


class TestListAndDelete:
    async def test_lists_are_per_owner(self, client: AsyncClient):
        await client.post("/api/tasks/1/links", json={"url": "https://example.com/a"})
        await client.post("/api/notes/2/links", json={"url": "https://example.com/b"})

        task_links = (await client.get("/api/tasks/1/links")).json()
        note_links = (await client.get("/api/notes/2/links")).json()

        assert [link["url"] for link in task_links] == ["https://example.com/a"]
        assert [link["url"] for link in note_links] == ["https://example.com/b"]

    async def test_delete(self, client: AsyncClient):
        created = (
            await client.post("/api/tasks/1/links", json={"url": "https://example.com"})
        ).json()

        response = await client.delete(f"/api/links/{created['id']}")
        assert response.status_code == 204

        response = await client.delete(f"/api/links/{created['id']}")
        assert response.status_code == 404
        assert response.json()["error_code"] == "LINK_NOT_FOUND"


class TestLinkPreview:
    async def test_preview(self, client: AsyncClient, fetcher: StubFetcher):
        fetcher.preview = LinkPreview(
            title="Example Domain",
            final_url="https://www.example.com/",
        )

        response = await client.get("/api/link-preview", params={"url": "https://example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == "https://example.com"
        assert data["finalUrl"] == "https://www.example.com/"
        assert data["title"] == "Example Domain"
        assert data["screenshotUrl"] is None
        assert "fetchedAt" in data

    async def test_preview_invalid_url(self, client: AsyncClient):
        response = await client.get("/api/link-preview", params={"url": "ftp://example.com"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_URL"

    async def test_preview_requires_url(self, client: AsyncClient):
        response = await client.get("/api/link-preview")
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestScreenshots:
    async def test_serves_existing_file(self, client: AsyncClient, isolated_settings: Path):
        screenshot_dir = isolated_settings / "screenshots"
        screenshot_dir.mkdir(parents=True, exist_ok=True)
        (screenshot_dir / SHOT).write_bytes(b"\x89PNG\r\n\x1a\nfake")

        response = await client.get(f"/api/screenshots/{SHOT}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    async def test_missing_file(self, client: AsyncClient):
        response = await client.get(f"/api/screenshots/{SHOT}")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SCREENSHOT_NOT_FOUND"

    async def test_rejects_unexpected_names(self, client: AsyncClient, isolated_settings: Path):
        isolated_settings.mkdir(parents=True, exist_ok=True)
        (isolated_settings / "taskdesk.png").write_bytes(b"not served")

        for name in ("taskdesk.png", "ABCDEF0123456789.png", "abc.png"):
            response = await client.get(f"/api/screenshots/{name}")
            assert response.status_code == 404
