"""Cliente MongoDB asíncrono (Motor).

El cliente no es global: lo crea y lo posee el `MongoNoteStore` configurado.
"""
from __future__ import annotations

import logging

import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from notes_api.core.config import Settings

_log = logging.getLogger("notes.mongo")


def build_async_client(settings: Settings) -> AsyncIOMotorClient:
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_timeout_ms, tz_aware=True)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return AsyncIOMotorClient(uri, **kwargs)


async def ping(db: AsyncIOMotorDatabase) -> None:
    """Lanza PyMongoError si el servidor no responde."""
    await db.client.admin.command("ping")
    _log.info("Mongo conectado (db=%s)", db.name)
