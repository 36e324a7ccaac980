"""
Dependencias reutilizables para routers (FastAPI Depends).

- Store de notas: la instancia vive en `app.state`, creada por `create_app()`.
"""
from fastapi import Request

from notes_api.core.exceptions import StoreUnavailable
from notes_api.repositories.note_repo import NoteStore


def get_note_store(request: Request) -> NoteStore:
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise StoreUnavailable("Note store no inicializado")
    return store
