"""
Main entrypoint for the Hosting Scheduler API.

``create_app`` assembles the FastAPI application: it sets up logging,
builds the clock, the slot store and the slot service, attaches them
to ``app.state`` and mounts the versioned routers.  Nothing here is a
module-level singleton except the default ``app`` itself, so tests can
call ``create_app`` with their own settings and clock.  Run it with::

    uvicorn hosting_scheduler_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.clock import Clock
from .core.config import Settings, settings as default_settings
from .core.db import resolve_database_path
from .core.exceptions import (
    AuthError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    SchedulerError,
    ServiceError,
    StorageError,
    ValidationError,
)
from .core.logging_config import setup_logging
from .services.slot_service import SlotService
from .services.slot_store import SlotStore

logger = logging.getLogger(__name__)

# Status for each error class.  AuthError is special-cased by code.
ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ServiceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "message": None, "error": message},
        headers=headers,
    )


async def scheduler_error_handler(request: Request, exc: SchedulerError) -> JSONResponse:
    """Translate application errors into the JSON error envelope."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    headers = None
    if isinstance(exc, AuthError):
        if exc.code == "invalid_token":
            status_code = status.HTTP_403_FORBIDDEN
        else:
            headers = {"WWW-Authenticate": "Bearer"}
    if status_code >= 500:
        # Details were logged where the failure happened; the message
        # itself is generic.
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(status_code, exc.message, headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (unknown path, wrong method) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found"
    else:
        message = str(exc.detail)
    return _error_response(exc.status_code, message, exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment-derived
        ``core.config.settings``.
    clock : Optional[Clock]
        Source of "today".  Defaults to a wall clock in
        ``settings.timezone``.

    Returns
    -------
    FastAPI
        A configured application whose schema is created on startup.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    clock = clock or Clock(settings.timezone)
    store = SlotStore(
        resolve_database_path(settings.database_url),
        clock,
        timeout=settings.database_timeout,
    )
    service = SlotService(store, clock)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.clock = clock
    app.state.slot_store = store
    app.state.slot_service = service

    app.add_exception_handler(SchedulerError, scheduler_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        version = store.init_schema()
        logger.info(
            "Database %s at schema version %s; today is %s (%s)",
            store.database_path,
            version,
            clock.today().isoformat(),
            settings.timezone,
        )

    return app


# Created at import time so that uvicorn can discover it.
app = create_app()
