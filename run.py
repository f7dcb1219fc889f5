"""Entry point for serving the Course Registry API.

Starts the FastAPI application with Uvicorn.  Host, port and the
keep-alive timeout are read from the environment through
``course_registry_api.app.core.config.settings`` (``API_HOST``,
``API_PORT``, ``KEEP_ALIVE_TIMEOUT``); the database file comes from
``DATABASE_URL``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from course_registry_api.app.core.config import settings
from course_registry_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=settings.keep_alive_timeout,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on %s:%s", settings.api_host, settings.api_port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
