"""
Middlewares de aplicación: request id, logging por petición y CORS.
"""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from notes_api.core.config import Settings
from notes_api.core.exceptions import internal_error_response

_BODY_METHODS = {"POST", "PUT", "PATCH"}


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex
        request.state.request_id = rid
        response = await call_next(request)
        response.headers["X-Request-Id"] = rid
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Registra método, ruta y body antes de despachar; status y latencia al final."""

    def __init__(self, app: FastAPI, body_max: int = 1000) -> None:
        super().__init__(app)
        self.log = logging.getLogger("notes.request")
        self.body_max = body_max

    async def _body_text(self, request: Request) -> str:
        if request.method not in _BODY_METHODS:
            return "-"
        raw = await request.body()
        if not raw:
            return "-"
        text = raw.decode("utf-8", errors="replace")
        if len(text) > self.body_max:
            text = text[: self.body_max] + "..."
        return text

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        rid = getattr(request.state, "request_id", None)
        self.log.info(
            "method=%s path=%s body=%s request_id=%s",
            request.method, request.url.path, await self._body_text(request), rid,
        )
        try:
            response = await call_next(request)
        except Exception:
            # Dentro de la pila: el 500 conserva X-Request-Id y cabeceras CORS
            self.log.exception("Unhandled error request_id=%s", rid)
            response = internal_error_response()
        dt_ms = int((time.perf_counter() - start) * 1000)
        self.log.info(
            "method=%s path=%s status=%s latency_ms=%s request_id=%s",
            request.method, request.url.path, response.status_code, dt_ms, rid,
        )
        return response


def add_middlewares(app: FastAPI, settings: Settings) -> None:
    # El último añadido es el más externo: CORS > RequestId > Logging
    app.add_middleware(LoggingMiddleware, body_max=settings.request_log_body_max)
    app.add_middleware(RequestIdMiddleware)
    # CORS configurable desde settings
    # Si cors_allow_any=True, habilita todos los orígenes con regex.
    cors_kwargs = dict(
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    if settings.cors_allow_any:
        # Con orígenes dinámicos y sin cookies, desactiva credentials para cumplir CORS
        cors_kwargs["allow_origins"] = []
        cors_kwargs["allow_origin_regex"] = ".*"
        cors_kwargs["allow_credentials"] = False
    app.add_middleware(CORSMiddleware, **cors_kwargs)
