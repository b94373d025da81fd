"""
FastAPI entrypoint for the TripMaster backend application.

``create_app`` builds the application around a ``Database`` handle, which
is created from settings unless one is passed in. The module-level
``app`` is what uvicorn serves::

    uvicorn tripmaster.main:app --reload
"""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tripmaster.api.router import api_router
from tripmaster.core.config import settings
from tripmaster.core.exceptions import AppError, UnavailableError
from tripmaster.core.logging_config import setup_logging
from tripmaster.core.utils import format_error
from tripmaster.db.session import Database, integrity_error_to_app_error, is_transient_error

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _validation_message(exc: RequestValidationError) -> str:
    """Turn the first field error into a short message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    fields = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if fields:
        return f"{'.'.join(fields)}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def prepare_database(db: Database) -> bool:
    """Probe connectivity, then create missing tables when DB_AUTO_CREATE is set."""
    if not db.probe(settings.DB_CONNECT_ATTEMPTS, settings.DB_CONNECT_RETRY_DELAY):
        return False
    if settings.DB_AUTO_CREATE:
        try:
            db.create_all()
        except SQLAlchemyError as e:
            logger.error(f"Could not create tables: {e}")
            return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    db: Database = app.state.db
    # Runs in a worker thread; startup does not wait for it
    preparing = asyncio.create_task(asyncio.to_thread(prepare_database, db))
    yield
    # Worker threads cannot be cancelled; wait for it before closing the pool
    await preparing
    db.dispose()
    logger.info("Database pool closed")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": message}."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error(_validation_message(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.info(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        error = integrity_error_to_app_error(exc)
        return JSONResponse(status_code=error.status_code, content=format_error(error.message))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
        message = UnavailableError.default_message if is_transient_error(exc) else "Internal server error"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error(message),
        )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for travel planning: POIs, itineraries, budgets and memos",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.db = database or Database.from_settings(settings)
    app.state.started_at = time.monotonic()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Welcome document with the endpoint map."""
        return {
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "status": "running",
            "timestamp": _timestamp(),
            "documentation": "/docs",
            "endpoints": {
                "auth": "/api/auth",
                "pois": "/api/pois",
                "itineraries": "/api/itineraries",
                "budgets": "/api/budgets",
                "memos": "/api/memos",
                "amap": "/api/amap",
            },
        }

    @app.get("/health")
    def health(request: Request):
        """Health check endpoint; 503 when the database does not answer."""
        db: Database = request.app.state.db
        try:
            rows = db.query("SELECT CURRENT_TIMESTAMP AS now")
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "timestamp": _timestamp(),
                    "database": "disconnected",
                    "error": "Database connection failed",
                },
            )
        return {
            "status": "healthy",
            "timestamp": _timestamp(),
            "database": "connected",
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "dbTime": jsonable_encoder(rows[0]["now"]) if rows else None,
        }

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn
    uvicorn.run("tripmaster.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
