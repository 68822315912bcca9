"""
Main entrypoint for the Highscore API.

This module assembles the FastAPI application: it sets up logging,
builds the highscore store over a SQLite connection pool, registers a
lifespan handler that initialises and closes the database and maps
storage failures to HTTP responses.  ``create_app`` builds the app, which is then instantiated
at module import time as ``app`` so it can be served directly::

    uvicorn highscore_api.app.main:app

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.db import create_pool, init_db
from .core.errors import StorageIOFailure
from .core.logging_config import setup_logging
from .api.router import router
from .services.highscore_service import HighscoreService

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None, seed_demo: Optional[bool] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_url : Optional[str]
        SQLite file to use instead of ``settings.database_url``.
    seed_demo : Optional[bool]
        Overrides ``settings.seed_demo``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The database is
        not touched until the lifespan handler runs on startup.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    pool = create_pool(database_url)
    seed = settings.seed_demo if seed_demo is None else seed_demo

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # StorageUnavailable propagates and aborts startup.
        init_db(pool, seed_demo=seed)
        try:
            yield
        finally:
            pool.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.include_router(router)
    app.state.highscore_service = HighscoreService(pool)

    @app.exception_handler(StorageIOFailure)
    async def storage_failure_handler(request: Request, exc: StorageIOFailure) -> JSONResponse:
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage failure"},
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
