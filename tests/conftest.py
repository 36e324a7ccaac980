"""
Fixtures compartidas: stores de notas, colección Motor simulada y clientes HTTP.
"""
import os

# Antes de importar la app: store en memoria y logs silenciosos
os.environ["NOTE_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_api.core.config import Settings
from notes_api.main import create_app
from notes_api.repositories.memory_note_repo import InMemoryNoteStore
from notes_api.repositories.note_repo import MongoNoteStore


@pytest.fixture
def test_settings():
    return Settings(note_store="memory", api_prefix="/api", static_dir=None)


@pytest.fixture
def memory_store():
    return InMemoryNoteStore()


@pytest.fixture
def mock_collection():
    """
    Colección Motor simulada: los métodos awaitables son AsyncMock y
    `find()` devuelve un cursor con `to_list` asíncrono.
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def mongo_store(mock_collection):
    return MongoNoteStore(mock_collection)


def _client(app, raise_app_exceptions=True):
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(test_settings, memory_store):
    """Cliente HTTP contra una app con store en memoria (sin servidor real)."""
    app = create_app(settings=test_settings, note_store=memory_store)
    async with _client(app) as client:
        yield client


@pytest_asyncio.fixture
async def mongo_client(test_settings, mongo_store):
    app = create_app(settings=test_settings, note_store=mongo_store)
    async with _client(app) as client:
        yield client


@pytest.fixture
def make_client(test_settings):
    """Fábrica de clientes para stores arbitrarios (p.ej. stores que fallan)."""

    def _make(store, raise_app_exceptions=True):
        app = create_app(settings=test_settings, note_store=store)
        return _client(app, raise_app_exceptions=raise_app_exceptions)

    return _make
