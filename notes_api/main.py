"""Entrada principal de la app FastAPI (configura middlewares, excepciones, routers y store)."""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from notes_api.api.router import api_router
from notes_api.core.config import Settings, settings as default_settings
from notes_api.core.exceptions import register_exception_handlers
from notes_api.core.logging import setup_logging
from notes_api.core.middleware import add_middlewares
from notes_api.repositories.note_repo import NoteStore, build_note_store

_log = logging.getLogger("notes.startup")


def create_app(settings: Optional[Settings] = None, note_store: Optional[NoteStore] = None) -> FastAPI:
    """Construye la app; `note_store` permite inyectar un store ya creado (tests)."""
    settings = settings or default_settings
    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.note_store = note_store

    add_middlewares(app, settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup():
        if app.state.note_store is None:
            app.state.note_store = build_note_store(settings)
        _log.info("Note store: %s", app.state.note_store.kind)
        await app.state.note_store.start()

    @app.on_event("shutdown")
    async def on_shutdown():
        if app.state.note_store is not None:
            await app.state.note_store.close()

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)

    # Frontend compilado al final para no tapar la API
    static_path = settings.static_path
    if static_path is not None:
        app.mount("/", StaticFiles(directory=static_path, html=True), name="static")

    return app


setup_logging(default_settings.log_level)
app = create_app()


def run() -> None:
    """Arranca uvicorn en HOST:PORT (PORT=8080 por defecto)."""
    _log.info("Server running on port %s", default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_level=default_settings.log_level.lower())


if __name__ == "__main__":
    run()
