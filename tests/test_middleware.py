"""
Tests de middlewares: request id, logging de peticiones y frontend estático.
"""
import logging
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from notes_api.core.config import Settings
from notes_api.main import create_app
from notes_api.repositories.memory_note_repo import InMemoryNoteStore


@pytest.mark.asyncio
async def test_request_id_is_generated(test_client):
    resp = await test_client.get("/api/notes")
    assert len(resp.headers["X-Request-Id"]) == 32


@pytest.mark.asyncio
async def test_request_id_is_echoed(test_client):
    resp = await test_client.get("/api/notes", headers={"X-Request-Id": "abc123"})
    assert resp.headers["X-Request-Id"] == "abc123"


@pytest.mark.asyncio
async def test_request_is_logged_with_body(test_client, caplog):
    with caplog.at_level(logging.INFO, logger="notes.request"):
        resp = await test_client.post("/api/notes", json={"content": "logged note"})

    assert resp.status_code == 201
    messages = [r.getMessage() for r in caplog.records if r.name == "notes.request"]
    assert any("method=POST" in m and "path=/api/notes" in m and "logged note" in m for m in messages)
    assert any("status=201" in m for m in messages)


@pytest.mark.asyncio
async def test_cors_allows_any_origin(test_client):
    resp = await test_client.get("/api/notes", headers={"Origin": "http://frontend.example"})
    assert resp.headers["access-control-allow-origin"] == "http://frontend.example"


@pytest.mark.asyncio
async def test_static_frontend_is_served(tmp_path):
    (tmp_path / "index.html").write_text("<h1>notes</h1>")
    settings = Settings(_env_file=None, note_store="memory", static_dir=str(tmp_path))
    app = create_app(settings=settings, note_store=InMemoryNoteStore())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        index = await client.get("/")
        missing = await client.get("/missing.js")
        api = await client.get("/api/notes")

    assert index.status_code == 200
    assert "notes" in index.text
    assert missing.status_code == 404
    assert missing.json() == {"error": "unknown endpoint"}
    assert api.json() == []


@pytest.mark.asyncio
async def test_unexpected_500_keeps_request_id_and_cors(make_client):
    store = InMemoryNoteStore()
    store.list_all = AsyncMock(side_effect=RuntimeError("boom"))

    async with make_client(store) as client:
        resp = await client.get(
            "/api/notes",
            headers={"Origin": "http://frontend.example", "X-Request-Id": "req-500"},
        )

    assert resp.status_code == 500
    assert resp.json() == {"error": "internal server error"}
    assert resp.headers["X-Request-Id"] == "req-500"
    assert resp.headers["access-control-allow-origin"] == "http://frontend.example"


@pytest.mark.asyncio
async def test_trailing_slash_with_static_mount(tmp_path):
    (tmp_path / "index.html").write_text("<h1>notes</h1>")
    settings = Settings(_env_file=None, note_store="memory", static_dir=str(tmp_path))
    app = create_app(settings=settings, note_store=InMemoryNoteStore())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        created = await client.post("/api/notes/", json={"content": "slash"})
        listed = await client.get("/api/notes/")

    assert created.status_code == 201
    assert listed.status_code == 200
    assert [n["content"] for n in listed.json()] == ["slash"]
