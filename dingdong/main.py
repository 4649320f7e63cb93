"""FastAPI application entry point for the Ding Dong responder."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, TextIO

from fastapi import FastAPI

from dingdong import __version__
from dingdong.api.intake import register_intake_route
from dingdong.core.config import Settings, get_settings
from dingdong.core.errors import BodyTooLargeError, body_too_large_handler
from dingdong.core.limits import body_limit_middleware
from dingdong.lifecycle import LifecycleController

logger = logging.getLogger("dingdong.app")


def create_app(settings: Settings | None = None, console: TextIO | None = None) -> FastAPI:
    """Build the application around a fresh ``LifecycleController``.

    The server context only exists between lifespan startup and shutdown;
    requests reach the intake through ``app.state.context``.
    """

    settings = settings or get_settings()
    controller = LifecycleController(settings, console=console)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.context = controller.start()
        logger.info("Serving on %s", settings.listen_address)
        try:
            yield
        finally:
            controller.shutdown()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.controller = controller

    app.middleware("http")(body_limit_middleware(settings.max_body_size_bytes))
    app.add_exception_handler(BodyTooLargeError, body_too_large_handler)

    register_intake_route(app, settings.max_body_size_bytes)
    return app
