"""
FastAPI application entrypoint for the GitHub token generator.
"""

from __future__ import annotations

import logging
import sys
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from ghtoken.api.routes import CODE_REQUIRED, error_response
from ghtoken.api.routes import router as api_router
from ghtoken.api.ui import router as ui_router
from ghtoken.core.config import AppSettings, get_settings
from ghtoken.core.logging import configure_logging, uvicorn_log_level

logger = logging.getLogger(__name__)

TOKEN_ROUTE = "/api/github/token"

# An empty credential is reported the same as an unset one.
_MISSING_ERROR_TYPES = ("missing", "string_too_short")


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    # An unreadable body on the relay route means no usable code was sent.
    if request.url.path == TOKEN_ROUTE:
        return error_response(HTTPStatus.BAD_REQUEST, CODE_REQUIRED)
    return await request_validation_exception_handler(request, exc)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="GitHub Token Generator",
        version="0.1.0",
        description="Relay for GitHub OAuth code exchange and the page that drives it.",
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.include_router(api_router, prefix="/api")
    app.include_router(ui_router)
    return app


def main() -> int:
    """Validate configuration, then serve the app with uvicorn."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging()
        missing: set[str] = set()
        invalid: set[str] = set()
        for error in exc.errors():
            bucket = missing if error["type"] in _MISSING_ERROR_TYPES else invalid
            bucket.update(str(loc) for loc in error.get("loc", ()))
        if missing:
            logger.error(
                "Missing required environment variables: %s", ", ".join(sorted(missing))
            )
        if invalid:
            logger.error("Invalid environment variables: %s", ", ".join(sorted(invalid)))
        return 1

    import uvicorn

    app = create_app(settings)
    logger.info("Server running on http://localhost:%d", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=uvicorn_log_level(settings.log_level),
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())


__all__ = ["create_app", "main"]
