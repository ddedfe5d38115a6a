"""FastAPI application entrypoint for Merito."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .core.config import get_settings
from .core.logging import setup_logging
from .jobs import register_scheduler
from .services.errors import InternalError

logger = logging.getLogger(__name__)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Merito API", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")
    app.add_exception_handler(Exception, _unhandled_error)
    if settings.scheduler_enabled:
        register_scheduler(app)
    return app


app = create_app()
