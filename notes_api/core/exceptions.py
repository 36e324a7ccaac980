"""
Errores de dominio y handlers globales para respuestas de error consistentes.

Todas las respuestas de error tienen la forma `{"error": "<mensaje>"}`.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

UNKNOWN_ENDPOINT = "unknown endpoint"
INTERNAL_ERROR = "internal server error"


class NoteError(Exception):
    """Base de los errores del dominio de notas."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingField(NoteError):
    """El cliente omitió un campo obligatorio."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} missing")
        self.field = field


class InvalidId(NoteError):
    """El id no es sintácticamente válido para el store."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: Any) -> None:
        super().__init__("malformatted id")
        self.value = value


class NotFound(NoteError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, note_id: str) -> None:
        super().__init__("note not found")
        self.note_id = note_id


class ValidationFailed(NoteError):
    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailable(NoteError):
    """Fallo de transporte/conexión con el store."""


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def internal_error_response() -> JSONResponse:
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "malformatted JSON body"
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    msg = first.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        # 404 sin ruta y 405 en ruta conocida se tratan igual
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, UNKNOWN_ENDPOINT)
        return _error(exc.status_code, str(exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        log.info("Petición inválida request_id=%s: %s", _req_id(request), message)
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(NoteError)
    async def _note_error_handler(request: Request, exc: NoteError):
        if exc.status_code >= 500:
            log.error("Error de store request_id=%s: %s", _req_id(request), exc.message, exc_info=exc)
            return _error(exc.status_code, INTERNAL_ERROR)
        log.info("%s request_id=%s: %s", type(exc).__name__, _req_id(request), exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return internal_error_response()
