"""Entry point for the comment store service.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``COMMENTS_HOST`` and ``COMMENTS_PORT`` environment variables
(defaults ``0.0.0.0`` and ``3100``); see ``comment_store.app.core.config``
for the remaining settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from comment_store.app.core.config import settings
from comment_store.app.core.storage import get_comments_path
from comment_store.app.main import app


async def main() -> None:
    """Serve the comment store until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info(
        "Comment server running on http://%s:%s (document: %s)", settings.host, settings.port, get_comments_path()
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
