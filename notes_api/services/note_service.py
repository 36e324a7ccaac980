"""
Service layer for notes: thin wrappers over the configured store.
"""
from typing import Any, Dict, List, Optional

from notes_api.infrastructure.db.schemas.note import Note
from notes_api.repositories.note_repo import NoteStore, now_utc


async def list_notes(store: NoteStore) -> List[Note]:
    return await store.list_all()


async def get_note(store: NoteStore, note_id: str) -> Note:
    return await store.get_by_id(note_id)


async def create_note(store: NoteStore, content: str, important: Optional[bool] = None) -> Note:
    # `important` ausente o null -> False; la fecha se sella aquí una sola vez
    return await store.create(content, important=bool(important), date=now_utc())


async def update_note(store: NoteStore, note_id: str, changes: Dict[str, Any]) -> Note:
    return await store.update(note_id, changes)


async def delete_note(store: NoteStore, note_id: str) -> None:
    await store.delete(note_id)
