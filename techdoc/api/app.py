import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from techdoc.api import routes, websocket
from techdoc.api.dependencies import Services
from techdoc.documents.exceptions import (
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    DocumentValidationError,
)


def create_app(services: Services) -> FastAPI:
    """Build the HTTP/WebSocket application around already-built services."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        services.worker_pool.start()
        try:
            yield
        finally:
            await asyncio.to_thread(
                services.worker_pool.stop,
                services.settings.worker_shutdown_timeout_seconds,
            )

    app = FastAPI(title="techdoc", lifespan=lifespan)
    app.state.services = services
    app.include_router(routes.router)
    app.include_router(websocket.router)

    @app.exception_handler(DocumentValidationError)
    async def _validation_error(_request: Request, exc: DocumentValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(DocumentNotFoundError)
    async def _not_found(_request: Request, _exc: DocumentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Document not found"})

    @app.exception_handler(DocumentAccessDeniedError)
    async def _access_denied(_request: Request, exc: DocumentAccessDeniedError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"message": str(exc)})

    @app.get("/health")
    def health() -> dict[str, object]:
        return {"status": "ok", "worker_pool": services.worker_pool.stats()}

    return app
