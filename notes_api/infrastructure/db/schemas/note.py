"""
Modelo Pydantic para documentos de la colección `notes`.
"""
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class Note(BaseModel):
    id: str  # ObjectId en string (Mongo) o entero en string (memoria)
    content: str
    important: bool = False
    date: datetime

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Note":
        """Construye la nota a partir de un documento Mongo (expone `_id` como `id`)."""
        return cls(
            id=str(doc["_id"]),
            content=doc["content"],
            important=bool(doc.get("important", False)),
            date=doc["date"],
        )
