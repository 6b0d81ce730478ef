"""Entry point for the Hosting Scheduler API.

Serves the FastAPI application with uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3001``); everything else is read by ``core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from hosting_scheduler_api.app.core.config import settings
from hosting_scheduler_api.app.main import app


async def run_api() -> None:
    """Start the API server and wait until it shuts down."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, settings.host, settings.port)
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
