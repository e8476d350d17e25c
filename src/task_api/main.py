"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, get_settings
from .db import Database
from .errors import register_error_handlers
from .logging_setup import setup_logging
from .routers import auth, tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup and close it on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(level=settings.log_level, log_dir=settings.effective_log_dir)

    database = Database(settings.database_path)
    database.open()
    app.state.database = database
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        database.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Tests pass their own settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant task management with recurring tasks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(tasks.router)

    @app.get("/health")
    def health():
        """Report that the service is up."""
        return {"status": "ok", "version": __version__}

    return app


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    main()
