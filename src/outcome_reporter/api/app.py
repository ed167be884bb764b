"""FastAPI application factory.

API layer:
- Validates inputs, reads the task result store
- Returns JSON summaries for the dashboard, plain-text errors
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from outcome_reporter import __version__
from outcome_reporter.config import Settings, load_settings
from outcome_reporter.db.repo import DbSession
from outcome_reporter.db.session import dispose_engine, get_engine, session_scope
from outcome_reporter.errors import AuthError, ReporterError, ValidationError

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings loaded at startup."""
    return request.app.state.settings


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    with session_scope(request.app.state.settings.database_url) as session:
        yield session


async def reporter_error_handler(request: Request, exc: ReporterError) -> PlainTextResponse:
    """Render request-level errors as plain text."""
    logger.warning(f"Rejected {request.url.path}: {exc.status_code} {exc}")
    return PlainTextResponse(str(exc), status_code=exc.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings and open the store engine; dispose it on shutdown."""
    if app.state.settings is None:
        app.state.settings = load_settings()
    settings: Settings = app.state.settings

    logging.basicConfig(level=settings.log_level)
    get_engine(settings.database_url)
    logger.info(f"Reporter started for requester {settings.requester}")

    try:
        yield
    finally:
        dispose_engine(settings.database_url)
        logger.info("Reporter stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Reporter settings. Loaded from the environment at
            startup when omitted.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Module Outcome Reporter",
        description="Per-module task outcomes from the task result store",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(AuthError, reporter_error_handler)
    app.add_exception_handler(ValidationError, reporter_error_handler)

    # Include routes
    from outcome_reporter.api.routes import modules

    app.include_router(modules.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance; settings come from the environment at startup
app = create_app()
