"""Entry point for the Highscore API.

Serves the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as DATABASE_URL, LOG_LEVEL, HOST and PORT is read
from environment variables; see ``highscore_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from highscore_api.app.core.config import settings
from highscore_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port come from ``settings`` (``HOST`` and ``PORT``).  If
    the database cannot be initialised the startup hook fails and
    Uvicorn exits without serving.
    """
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()
    if not server.started:
        logging.getLogger(__name__).critical("Highscore API failed to start")
        raise SystemExit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
