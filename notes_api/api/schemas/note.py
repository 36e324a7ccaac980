"""
Esquemas Pydantic para `notes` (entrada/salida de la API).
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class NoteCreate(BaseModel):
    # `content` es opcional aquí para responder "content missing" en vez de un 400 genérico
    content: Optional[str] = None
    important: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")


class NoteUpdate(BaseModel):
    """Update parcial: solo se aplican los campos presentes en el body."""
    content: Optional[str] = None
    important: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")


class NoteOut(BaseModel):
    id: str
    content: str
    important: bool
    date: datetime
