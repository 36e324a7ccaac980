"""
Bootstrap de la base Mongo: define y aplica el validador (JSON Schema) y los índices
de la colección `notes`.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

_log = logging.getLogger("notes.mongo.bootstrap")

NOTES_COLLECTION = "notes"

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["content", "important", "date"],
    "properties": {
        "content": {"bsonType": "string", "minLength": 1},
        "important": {"bsonType": "bool"},
        "date": {"bsonType": "date"},
    },
    "additionalProperties": True,
}

NOTE_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("date", 1)], "name": "date_asc"},
]


async def _collmod_or_create(db: AsyncIOMotorDatabase, name: str, validator: Dict[str, Any]) -> None:
    try:
        if name in await db.list_collection_names():
            await db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            await db.create_collection(name, validator={"$jsonSchema": validator})
    except PyMongoError as e:
        # Sin privilegios para collMod/create: seguimos sin validador estricto
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


async def _ensure_indexes(db: AsyncIOMotorDatabase, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            await coll.create_index(keys, **opts)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


async def ensure_collections(db: AsyncIOMotorDatabase) -> None:
    """Garantiza la colección de notas con su validador e índices."""
    await _collmod_or_create(db, NOTES_COLLECTION, NOTE_VALIDATOR)
    await _ensure_indexes(db, NOTES_COLLECTION, NOTE_INDEXES)
