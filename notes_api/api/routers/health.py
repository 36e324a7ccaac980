"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Depends, status

from notes_api.api.deps import get_note_store
from notes_api.api.schemas.health import HealthOut, PingOut
from notes_api.repositories.note_repo import NoteStore


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Ping básico")
async def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
async def health(store: NoteStore = Depends(get_note_store)) -> HealthOut:
    return HealthOut(ok=True, store=store.kind, store_ready=await store.ready())
