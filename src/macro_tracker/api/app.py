"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from macro_tracker.api.foods import router as foods_router
from macro_tracker.api.log import router as log_router
from macro_tracker.api.profile import router as profile_router
from macro_tracker.app_logging import configure_logging
from macro_tracker.config import parse_allowed_origins
from macro_tracker.containers import AppContainer
from macro_tracker.errors import (
    MacroTrackerError,
    NotFoundError,
    ParseError,
    PersistenceError,
    UpstreamUnavailable,
    ValidationError,
)

ERROR_STATUS_CODES: dict[type[MacroTrackerError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ParseError: 502,
    UpstreamUnavailable: 503,
    PersistenceError: 500,
}


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
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(log_router)
    app.include_router(foods_router)
    app.include_router(profile_router)

    @app.exception_handler(MacroTrackerError)
    async def handle_core_error(
        request: Request, exc: MacroTrackerError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "kind": exc.kind},
                exc_info=exc,
            )
        return JSONResponse(
            status_code=status_code,
            content={"error": str(exc), "kind": exc.kind},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: MacroTrackerError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 400
