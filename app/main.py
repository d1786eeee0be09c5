from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api import events
from app.config import Settings, settings as default_settings
from app.database.event_store import EventStore
from app.errors import EventValidationError, MalformedRequestError, PersistenceError
from app.services.event_service import EventService
from app.utils.logger import get_logger, setup_logging

setup_logging()

logger = get_logger(__name__)


async def _malformed_request_handler(request: Request, exc: MalformedRequestError):
    logger.warning("Malformed request body.", path=request.url.path, reason=exc.reason)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.reason},
    )


async def _validation_error_handler(request: Request, exc: EventValidationError):
    errors = [error.model_dump() for error in exc.errors]
    logger.warning("Request validation failed.", path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Request validation failed", "errors": errors},
    )


async def _persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("Failed to persist event.", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to persist event"},
    )


def create_app(settings: Optional[Settings] = None, store: Optional[EventStore] = None) -> FastAPI:
    """
    Build the application and wire the service to its store.

    Without an explicit store, one is built from ``settings``.
    """
    settings = settings or default_settings
    store = store or EventStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting event ingestion service...", version=settings.version)
        if settings.create_tables_on_startup:
            await store.create_tables()
            logger.info("Database tables ensured")
        yield
        logger.info("Shutting down event ingestion service...")
        await store.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.event_store = store
    app.state.event_service = EventService(store)

    app.add_exception_handler(MalformedRequestError, _malformed_request_handler)
    app.add_exception_handler(EventValidationError, _validation_error_handler)
    app.add_exception_handler(PersistenceError, _persistence_error_handler)

    app.include_router(events.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """Root endpoint with service info."""
        return {
            "service": settings.app_name,
            "version": settings.version,
            "docs": "/docs",
        }

    return app


app = create_app()
