"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wedding_gallery.api.albums import router as albums_router
from wedding_gallery.api.functions import router as functions_router
from wedding_gallery.api.pages import router as pages_router
from wedding_gallery.app_logging import configure_logging
from wedding_gallery.containers import AppContainer
from wedding_gallery.errors import GalleryError

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(
        request: Request, exc: GalleryError
    ) -> JSONResponse:
        logger.warning(
            "%s %s failed: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    app.include_router(functions_router)
    app.include_router(albums_router)
    app.include_router(pages_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
