"""Store de notas en memoria (un solo proceso, sin persistencia).

Las notas viven en una lista ordenada por instancia; el id nuevo es
`max(ids existentes) + 1`.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from notes_api.core.exceptions import InvalidId, NotFound
from notes_api.infrastructure.db.schemas.note import Note
from notes_api.repositories.note_repo import NoteStore, now_utc, validate_changes, validate_content


def _parse_id(note_id: str) -> int:
    if not isinstance(note_id, str) or not note_id.isascii() or not note_id.isdigit():
        raise InvalidId(note_id)
    value = int(note_id)
    # Un id, una sola forma: "0001" no es "1"
    if str(value) != note_id:
        raise InvalidId(note_id)
    return value


class InMemoryNoteStore(NoteStore):
    kind = "memory"

    def __init__(self, notes: Optional[List[Note]] = None) -> None:
        self._notes: List[Note] = list(notes or [])

    def _next_id(self) -> str:
        if not self._notes:
            return "1"
        return str(max(int(n.id) for n in self._notes) + 1)

    def _index(self, note_id: str) -> int:
        key = _parse_id(note_id)
        for i, note in enumerate(self._notes):
            if int(note.id) == key:
                return i
        raise NotFound(note_id)

    async def list_all(self) -> List[Note]:
        return [n.model_copy() for n in self._notes]

    async def get_by_id(self, note_id: str) -> Note:
        return self._notes[self._index(note_id)].model_copy()

    async def create(self, content: str, important: bool = False, date: Optional[datetime] = None) -> Note:
        note = Note(
            id=self._next_id(),
            content=validate_content(content),
            important=bool(important),
            date=date or now_utc(),
        )
        self._notes.append(note)
        return note.model_copy()

    async def update(self, note_id: str, changes: Mapping[str, Any]) -> Note:
        _parse_id(note_id)
        set_ops = validate_changes(changes)
        i = self._index(note_id)
        updated = self._notes[i].model_copy(update=set_ops)
        self._notes[i] = updated
        return updated.model_copy()

    async def delete(self, note_id: str) -> None:
        try:
            i = self._index(note_id)
        except NotFound:
            return
        del self._notes[i]
