"""
Main entrypoint for the Job Board API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app`` so it
can be served directly, e.g.::

    uvicorn job_board_api.app.main:app --reload

All data lives in the in-memory entity store from ``core.store`` and
is lost when the process exits.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .core.config import settings
from .core.errors import request_validation_handler
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None, debug=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    # Schema failures share the 400 status of business validation errors.
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
