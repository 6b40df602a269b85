"""Entry point for the Music Library API.

Launches the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, e.g. under Docker, where only a single
Python file is specified.

``DATABASE_URL`` must be set; ``HOST`` and ``PORT`` default to
``0.0.0.0`` and ``8080``.

Usage:
    DATABASE_URL=music.db python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from music_library_api.app.core.config import settings
from music_library_api.app.main import app

logger = logging.getLogger(__name__)

STARTUP_FAILURE = 3


async def main() -> None:
    """Serve the API until interrupted."""
    logger.info("Server starting on port %s", settings.port)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()
    if not server.started:
        logger.critical("Server failed to start")
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
