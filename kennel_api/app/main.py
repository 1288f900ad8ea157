"""
Main entrypoint for the Kennel Dog Roster API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds the object graph
explicitly: ``Settings`` -> ``Database`` -> ``DogService``.  The
service is stored on ``app.state`` and handed to the routes through a
dependency.  Run with uvicorn, e.g.::

    uvicorn kennel_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging
from .exception_handlers import register_exception_handlers
from .services.dog_service import DogService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Logging first so that the startup messages below are emitted.
    logger = setup_logging(settings)

    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database.init_db()
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.dog_service = DogService(database)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")
    logger.info("Configured %s %s with database %s", settings.project_name, settings.api_version, database.path)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
