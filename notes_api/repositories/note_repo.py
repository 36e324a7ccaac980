"""Repo de la colección `notes`.

- `NoteStore` define el contrato común (async) de los stores de notas.
- `MongoNoteStore` persiste en Mongo vía Motor; expone `_id` como `id` (str).
- `build_note_store` elige la implementación según `settings.note_store`.
"""
from __future__ import annotations

import abc
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import OperationFailure, PyMongoError

from notes_api.core.config import Settings
from notes_api.core.exceptions import InvalidId, NotFound, StoreUnavailable, ValidationFailed
from notes_api.infrastructure.db.bootstrap import NOTES_COLLECTION, ensure_collections
from notes_api.infrastructure.db.mongo_async import build_async_client, ping
from notes_api.infrastructure.db.schemas.note import Note

_log = logging.getLogger("notes.mongo")

UPDATABLE_FIELDS = ("content", "important")

# Código de Mongo para "Document failed validation"
DOCUMENT_VALIDATION_FAILURE = 121


def now_utc() -> datetime:
    # Mongo guarda milisegundos; truncamos para que lo devuelto coincida con lo guardado
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def validate_content(content: Any) -> str:
    if not isinstance(content, str) or not content:
        raise ValidationFailed("content must be a non-empty string")
    return content


def validate_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Filtra y valida un update parcial; solo `content` e `important` son editables."""
    out: Dict[str, Any] = {}
    for key, value in changes.items():
        if key not in UPDATABLE_FIELDS:
            raise ValidationFailed(f"{key} cannot be updated")
        if key == "content":
            out[key] = validate_content(value)
        elif not isinstance(value, bool):
            raise ValidationFailed("important must be a boolean")
        else:
            out[key] = value
    return out


class NoteStore(abc.ABC):
    """Contrato CRUD sobre la colección de notas."""

    kind: str = "abstract"

    async def start(self) -> None:
        """Hook de arranque (conexión, índices)."""

    async def close(self) -> None:
        """Hook de apagado."""

    async def ready(self) -> bool:
        return True

    @abc.abstractmethod
    async def list_all(self) -> List[Note]:
        ...

    @abc.abstractmethod
    async def get_by_id(self, note_id: str) -> Note:
        ...

    @abc.abstractmethod
    async def create(self, content: str, important: bool = False, date: Optional[datetime] = None) -> Note:
        ...

    @abc.abstractmethod
    async def update(self, note_id: str, changes: Mapping[str, Any]) -> Note:
        ...

    @abc.abstractmethod
    async def delete(self, note_id: str) -> None:
        ...


def _object_id(note_id: str) -> ObjectId:
    if not ObjectId.is_valid(note_id):
        raise InvalidId(note_id)
    return ObjectId(note_id)


def _store_error(exc: PyMongoError) -> Exception:
    if isinstance(exc, OperationFailure) and exc.code == DOCUMENT_VALIDATION_FAILURE:
        return ValidationFailed("Note validation failed")
    return StoreUnavailable(f"Mongo error: {exc}")


class MongoNoteStore(NoteStore):
    kind = "mongo"

    def __init__(self, collection: AsyncIOMotorCollection, client: Optional[AsyncIOMotorClient] = None) -> None:
        self.collection = collection
        self.client = client
        self._ready = False
        self._bootstrapped = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoNoteStore":
        client = build_async_client(settings)
        db = client[settings.mongo_db]
        return cls(db[NOTES_COLLECTION], client=client)

    async def _connect(self) -> bool:
        """Ping y, la primera vez que Mongo responde, validador e índices."""
        db = self.collection.database
        try:
            await ping(db)
        except PyMongoError as e:
            _log.warning("Mongo no accesible; omitiendo ensure_collections(): %s", e)
            return False
        if not self._bootstrapped:
            await ensure_collections(db)
            self._bootstrapped = True
        return True

    async def start(self) -> None:
        # No tumbar la app: las peticiones fallarán con 500 hasta que Mongo responda
        self._ready = await self._connect()

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
        self._ready = False

    async def ready(self) -> bool:
        if not self._ready:
            self._ready = await self._connect()
        return self._ready

    async def list_all(self) -> List[Note]:
        try:
            docs = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            raise _store_error(e) from e
        return [Note.from_document(d) for d in docs]

    async def get_by_id(self, note_id: str) -> Note:
        oid = _object_id(note_id)
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise _store_error(e) from e
        if doc is None:
            raise NotFound(note_id)
        return Note.from_document(doc)

    async def create(self, content: str, important: bool = False, date: Optional[datetime] = None) -> Note:
        doc = {
            "content": validate_content(content),
            "important": bool(important),
            "date": date or now_utc(),
        }
        try:
            res = await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise _store_error(e) from e
        doc["_id"] = res.inserted_id
        return Note.from_document(doc)

    async def update(self, note_id: str, changes: Mapping[str, Any]) -> Note:
        oid = _object_id(note_id)
        set_ops = validate_changes(changes)
        try:
            if set_ops:
                doc = await self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": set_ops},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise _store_error(e) from e
        if doc is None:
            raise NotFound(note_id)
        return Note.from_document(doc)

    async def delete(self, note_id: str) -> None:
        oid = _object_id(note_id)
        try:
            await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise _store_error(e) from e


def build_note_store(settings: Settings) -> NoteStore:
    """Crea el store configurado; cada app tiene su propia instancia."""
    if settings.note_store == "memory":
        from notes_api.repositories.memory_note_repo import InMemoryNoteStore

        return InMemoryNoteStore()
    return MongoNoteStore.from_settings(settings)
