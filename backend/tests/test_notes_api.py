"""
CaseDesk Backend: Notes API Integration Tests
=============================================

What we test:
    ✅ Create returns 201 with the generated id and sanitized content
    ✅ List is in ascending id order
    ✅ Update replaces content only
    ✅ Non-integer ids are rejected with 422
    ✅ Liveness and health endpoints
"""

import pytest
from httpx import ASGITransport, AsyncClient

from casedesk.main import create_app


class TestNotes:

    @pytest.mark.asyncio
    async def test_create_returns_record(self, client, auth_headers):
        response = await client.post(
            "/api/notes",
            json={"category": "howto", "content": "<script>x()</script>Reboot the router"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "category": "howto",
            "content": "Reboot the router",
        }

    @pytest.mark.asyncio
    async def test_list_in_id_order(self, client, auth_headers):
        for text in ["first", "second", "third"]:
            await client.post(
                "/api/notes", json={"category": "log", "content": text}, headers=auth_headers
            )

        listed = (await client.get("/api/notes")).json()

        assert [n["content"] for n in listed] == ["first", "second", "third"]
        assert [n["id"] for n in listed] == sorted(n["id"] for n in listed)

    @pytest.mark.asyncio
    async def test_update_replaces_content_only(self, client, auth_headers):
        created = await client.post(
            "/api/notes", json={"category": "howto", "content": "old"}, headers=auth_headers
        )
        note_id = created.json()["id"]

        response = await client.put(
            f"/api/notes/{note_id}",
            json={"content": "<b onmouseover=\"x()\">new</b>"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Note updated successfully"}
        stored = (await client.get("/api/notes")).json()[0]
        assert stored == {"id": note_id, "category": "howto", "content": "<b>new</b>"}

    @pytest.mark.asyncio
    async def test_delete(self, client, auth_headers):
        created = await client.post(
            "/api/notes", json={"category": "a", "content": "b"}, headers=auth_headers
        )

        response = await client.delete(f"/api/notes/{created.json()['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Note deleted successfully"}
        assert (await client.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_id_still_succeeds(self, client, auth_headers):
        updated = await client.put("/api/notes/404", json={"content": "x"}, headers=auth_headers)
        deleted = await client.delete("/api/notes/404", headers=auth_headers)

        assert updated.status_code == 200
        assert deleted.status_code == 200

    @pytest.mark.asyncio
    async def test_non_integer_id_is_422(self, client, auth_headers):
        response = await client.delete("/api/notes/abc", headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"


class TestLivenessAndHealth:

    @pytest.mark.asyncio
    async def test_root_returns_text(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == "Backend is running!"

    @pytest.mark.asyncio
    async def test_health_connected(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unreachable_database(self, settings_factory):
        app = create_app(
            settings_factory(database_url="sqlite+aiosqlite:////nonexistent_dir/casedesk.db")
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/health")
        await app.state.store.dispose()

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_list_fails_with_500_when_database_unreachable(self, settings_factory):
        app = create_app(
            settings_factory(database_url="sqlite+aiosqlite:////nonexistent_dir/casedesk.db")
        )
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/api/notes")
        await app.state.store.dispose()

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch notes"
