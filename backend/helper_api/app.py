"""Application factory for the media helper API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from .middleware import SharedSecretMiddleware
from .routers import catalog, health, media_check
from .settings import HelperSettings
from .state import AppState

logger = logging.getLogger(__name__)


def create_app(settings: HelperSettings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""

    resolved_settings = settings or HelperSettings()
    app_state = AppState(settings=resolved_settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if resolved_settings.refresh_on_startup:
            app_state.refresh_cycle.start()
        try:
            yield
        finally:
            app_state.refresh_cycle.stop()

    app = FastAPI(title="Media Helper API", version="0.1.0", lifespan=lifespan)
    app.state.app_state = app_state
    app.state.settings = app_state.settings
    app.add_middleware(
        SharedSecretMiddleware,
        secret=resolved_settings.authorization_value.get_secret_value(),
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        logger.info("received invalid request url=%s error=%s", request.url, exc.errors())
        return PlainTextResponse("invalid request", status_code=400)

    for router in (
        health.router,
        media_check.router,
        catalog.router,
    ):
        app.include_router(router)

    return app
