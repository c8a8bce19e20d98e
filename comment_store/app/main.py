"""
Main entrypoint for the Comment Store API.

This module assembles the FastAPI application: logging, CORS and the
comment routes.  The ``create_app`` function builds and configures the
app, which is then instantiated at module import time as ``app`` so
it can be served directly, e.g.::

    uvicorn comment_store.app.main:app --port 3100
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.logging_config import setup_logging
from .api.router import router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    # The editor runs on a different origin (another port at least), so
    # cross‑origin requests must be accepted.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


app = create_app()
