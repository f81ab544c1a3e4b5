"""Entry point for serving the Green Space API.

Starts the FastAPI application under uvicorn.  Host, port, log level
and the database location come from ``Settings`` (environment
variables ``HOST``, ``PORT``, ``LOG_LEVEL`` and ``DATABASE_URL``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from green_space_api.app.core.config import settings
from green_space_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
