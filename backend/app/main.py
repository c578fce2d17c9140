"""
Application entry point for Clipper LMS.

``create_app`` builds a FastAPI application around an explicitly constructed
``Database``, disposing it on shutdown only when it built it itself. ``app``
is the instance served by uvicorn (``uvicorn app.main:app`` from the
``backend`` directory).
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings
from app.core.database import Database, init_db
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import configure_logging
from app.routers import api_router


logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        app_settings: Settings to use; defaults to the environment settings
        database: Database to serve from; built from settings when omitted

    Returns:
        FastAPI: The configured application
    """
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)
    owns_database = database is None
    database = database or Database.from_settings(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all_tables()
        db = database.session()
        try:
            init_db(db, app_settings)
        finally:
            db.close()
        logger.info(f"{app_settings.PROJECT_NAME} {app_settings.VERSION} started")
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        description=app_settings.DESCRIPTION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database

    if app_settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/", tags=["info"])
    def root():
        return {
            "message": f"Welcome to {app_settings.PROJECT_NAME} API",
            "version": app_settings.VERSION,
            "documentation": "/docs",
        }

    @app.get("/health", tags=["info"])
    def health():
        database_ok = database.check_connection()
        return {
            "status": "ok" if database_ok else "degraded",
            "database": "up" if database_ok else "down",
        }

    return app


app = create_app()
