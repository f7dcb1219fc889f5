"""
Main entrypoint for the Course Registry API.

This module assembles the FastAPI application: it sets up logging,
attaches the store handle, registers the error handlers and includes
the API router under ``/api``.  ``create_app`` builds the app; an
instance is created at import time as ``app`` so it can be served
directly, e.g.::

    uvicorn course_registry_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import settings
from .core.db import Store, get_database_path, init_db
from .core.errors import RegistryError
from .core.logging_config import setup_logging
from .core.validation import describe_errors, error_fields

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply migrations once per process before serving requests.
    version = init_db(app.state.store, seed=settings.seed_courses)
    logger.info("Database %s ready at schema version %s", app.state.store.path, version)
    yield


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content = {"detail": exc.message}
    fields = getattr(exc, "fields", None)
    if fields:
        content["fields"] = fields
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are client errors (400), not 422.
    errors = list(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_errors(errors), "fields": error_fields(errors)},
    )


def create_app(store: Optional[Store] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[Store]
        Database handle used by every request.  Defaults to the file
        named by ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store or Store(get_database_path())

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
