"""API tests for reminder endpoints."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from httpx import AsyncClient


def _iso(delta: timedelta) -> str:
    return (datetime.now(UTC) + delta).isoformat()


async def _create(client: AsyncClient, **overrides) -> dict:
    body = {
        "targetType": "TASK",
        "targetId": 1,
        "dueAt": _iso(timedelta(hours=1)),
        "message": "Follow up",
    }
    body.update(overrides)
    response = await client.post("/api/reminders", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateReminder:
    async def test_create_returns_camel_case(self, client: AsyncClient):
        data = await _create(client)

        assert data["targetType"] == "TASK"
        assert data["targetId"] == 1
        assert data["message"] == "Follow up"
        assert data["isDone"] is False
        assert data["firedAt"] is None
        assert data["isOverdue"] is False
        assert "dueAt" in data

    async def test_lowercase_target_type(self, client: AsyncClient):
        data = await _create(client, targetType="note", targetId=2)
        assert data["targetType"] == "NOTE"

    async def test_invalid_target_type(self, client: AsyncClient):
        response = await client.post(
            "/api/reminders",
            json={"targetType": "PROJECT", "targetId": 1, "dueAt": _iso(timedelta())},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_TARGET"
        assert data["detail"] == "targetType"

    async def test_invalid_due_at(self, client: AsyncClient):
        response = await client.post(
            "/api/reminders",
            json={"targetType": "TASK", "targetId": 1, "dueAt": "tomorrow-ish"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_TIMESTAMP"
        assert data["detail"] == "dueAt"

    async def test_due_at_outside_utc_range(self, client: AsyncClient):
        response = await client.post(
            "/api/reminders",
            json={"targetType": "TASK", "targetId": 1, "dueAt": "0001-01-01T00:00:00+01:00"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_TIMESTAMP"

    async def test_missing_target(self, client: AsyncClient):
        response = await client.post(
            "/api/reminders",
            json={"targetType": "TASK", "targetId": 999, "dueAt": _iso(timedelta())},
        )
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "TARGET_NOT_FOUND"
        assert data["path"] == "/api/reminders"
        assert data["hint"]


class TestPollDue:
    async def test_due_reminder_delivered_once(self, client: AsyncClient):
        created = await _create(client, dueAt=_iso(timedelta(seconds=-1)), message="ping")
        await _create(client, dueAt=_iso(timedelta(days=1)))

        first = await client.get("/api/reminders/due")
        assert first.status_code == 200
        data = first.json()
        assert isinstance(data, list)
        assert [r["id"] for r in data] == [created["id"]]
        assert data[0]["firedAt"] is not None

        second = await client.get("/api/reminders/due")
        assert second.json() == []

    async def test_take_limits_batch(self, client: AsyncClient):
        for _ in range(3):
            await _create(client, dueAt=_iso(timedelta(minutes=-5)))

        response = await client.get("/api/reminders/due", params={"take": 2})
        assert len(response.json()) == 2

        response = await client.get("/api/reminders/due", params={"take": 0})
        assert len(response.json()) == 1

    async def test_take_must_be_integer(self, client: AsyncClient):
        response = await client.get("/api/reminders/due", params={"take": "many"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_rescheduling_rearms(self, client: AsyncClient):
        created = await _create(client, dueAt=_iso(timedelta(seconds=-1)))
        await client.get("/api/reminders/due")

        response = await client.put(
            f"/api/reminders/{created['id']}",
            json={"dueAt": _iso(timedelta(hours=2))},
        )
        assert response.status_code == 200
        assert response.json()["firedAt"] is None


class TestReminderCrud:
    async def test_get(self, client: AsyncClient):
        created = await _create(client)
        response = await client.get(f"/api/reminders/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    async def test_get_missing(self, client: AsyncClient):
        response = await client.get("/api/reminders/404")
        assert response.status_code == 404
        assert response.json()["error_code"] == "REMINDER_NOT_FOUND"

    async def test_non_integer_id(self, client: AsyncClient):
        response = await client.get("/api/reminders/abc")
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_mark_done_hides_from_list(self, client: AsyncClient):
        created = await _create(client)

        response = await client.put(f"/api/reminders/{created['id']}", json={"isDone": True})
        assert response.status_code == 200
        assert response.json()["isDone"] is True

        listed = await client.get("/api/reminders")
        assert len(listed.json()) == 0

        listed = await client.get("/api/reminders", params={"includeDone": "true"})
        assert len(listed.json()) == 1

    async def test_list_ordered_by_due(self, client: AsyncClient):
        later = await _create(client, dueAt=_iso(timedelta(hours=3)))
        sooner = await _create(client, dueAt=_iso(timedelta(hours=1)))

        response = await client.get("/api/reminders")
        ids = [r["id"] for r in response.json()]
        assert ids == [sooner["id"], later["id"]]

    async def test_list_is_json_array(self, client: AsyncClient):
        await _create(client)

        response = await client.get("/api/reminders", params={"includeDone": "1"})

        assert response.status_code == 200
        assert isinstance(response.json(), list)

    async def test_list_unbounded_without_limit(self, client: AsyncClient):
        for hours in range(1, 251):
            await _create(client, dueAt=_iso(timedelta(hours=hours)))

        response = await client.get("/api/reminders")
        assert len(response.json()) == 250

        response = await client.get("/api/reminders", params={"limit": 2, "offset": 1})
        assert len(response.json()) == 2

    async def test_overdue_flag(self, client: AsyncClient):
        created = await _create(client, dueAt=_iso(timedelta(hours=-1)))
        response = await client.get(f"/api/reminders/{created['id']}")
        assert response.json()["isOverdue"] is True

    async def test_delete(self, client: AsyncClient):
        created = await _create(client)

        response = await client.delete(f"/api/reminders/{created['id']}")
        assert response.status_code == 204

        response = await client.delete(f"/api/reminders/{created['id']}")
        assert response.status_code == 404


class TestUnexpectedErrors:
    async def test_stray_value_error_is_server_error(self, client: AsyncClient, engine):
        with patch.object(engine, "list_reminders", side_effect=ValueError("bad row")):
            response = await client.get("/api/reminders")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "ValueError"
        assert data["hint"] == "An internal error occurred. Check server logs."
