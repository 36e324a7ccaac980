"""
Endpoints para `notes`: listar, obtener, crear, actualizar y eliminar.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from starlette.convertors import Convertor, register_url_convertor

from notes_api.api.deps import get_note_store
from notes_api.api.schemas.note import NoteCreate, NoteOut, NoteUpdate
from notes_api.core.exceptions import MissingField
from notes_api.repositories.note_repo import NoteStore
from notes_api.services import note_service


class NoteIdConvertor(Convertor):
    """Segmento `{id}`: token alfanumérico; el store decide si es un id válido."""

    regex = "[0-9A-Za-z]+"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("note_id", NoteIdConvertor())

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("/", response_model=List[NoteOut], include_in_schema=False)
@router.get(
    "",
    response_model=List[NoteOut],
    summary="Listar notas",
)
async def list_notes(store: NoteStore = Depends(get_note_store)):
    return await note_service.list_notes(store)


@router.get(
    "/{note_id:note_id}",
    response_model=NoteOut,
    summary="Obtener nota por id",
)
async def get_note(note_id: str, store: NoteStore = Depends(get_note_store)):
    return await note_service.get_note(store, note_id)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=NoteOut, include_in_schema=False)
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Crear nota",
    description="Crea una nota; `important` es false si se omite y la fecha la pone el servidor.",
)
async def create_note(payload: Optional[NoteCreate] = None, store: NoteStore = Depends(get_note_store)):
    if payload is None or payload.content is None:
        raise MissingField("content")
    return await note_service.create_note(store, payload.content, payload.important)


@router.put(
    "/{note_id:note_id}",
    response_model=NoteOut,
    summary="Actualizar nota",
    description="Update parcial de `content` y/o `important`; `id` y `date` no cambian.",
)
async def update_note(note_id: str, payload: Optional[NoteUpdate] = None, store: NoteStore = Depends(get_note_store)):
    changes = payload.model_dump(exclude_unset=True) if payload is not None else {}
    return await note_service.update_note(store, note_id, changes)


@router.delete(
    "/{note_id:note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Eliminar nota",
)
async def delete_note(note_id: str, store: NoteStore = Depends(get_note_store)):
    await note_service.delete_note(store, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
