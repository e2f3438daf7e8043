"""
Perfume Catalog Editor - Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import structlog
from datetime import datetime, timezone

from config import settings
from exceptions import AppError

# Configure structured logging
logging.basicConfig(format="%(message)s", level=getattr(logging, settings.log_level))

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def load_configured_files() -> None:
    """Load the catalog and note CSVs named in settings, if any."""
    from services.catalog_service import get_catalog_service
    from services.note_service import get_note_service

    if settings.catalog_configured:
        try:
            get_catalog_service().load_file(settings.catalog_csv_path, encoding=settings.csv_encoding)
        except (AppError, OSError) as e:
            logger.error("catalog_load_failed", path=settings.catalog_csv_path, error=str(e))

    if settings.notes_csv_path:
        try:
            get_note_service().load_file(settings.notes_csv_path, encoding=settings.csv_encoding)
        except (AppError, OSError) as e:
            logger.error("notes_load_failed", path=settings.notes_csv_path, error=str(e))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Load configured CSV files
    Shutdown: Nothing to clean up (state is in memory)
    """
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug
    )

    load_configured_files()

    yield

    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Perfume Catalog Editor",
    description="Data-quality checks, duplicate cleanup and guarded editing for a perfume catalog",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and catalog size
    """
    from services.catalog_service import get_catalog_service
    from services.note_service import get_note_service

    catalog = get_catalog_service()

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "catalog": {
            "source": catalog.source,
            "perfumes": len(catalog.perfumes),
            "revision": catalog.revision,
        },
        "notes": len(get_note_service().notes),
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Perfume Catalog Editor API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "catalog": "/api/catalog",
            "quality": "/api/quality",
            "session": "/api/session",
            "notes": "/api/notes",
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.catalog import router as catalog_router
from routes.quality import router as quality_router
from routes.session import router as session_router
from routes.notes import router as notes_router

app.include_router(catalog_router, prefix="/api/catalog", tags=["Catalog"])
app.include_router(quality_router, prefix="/api/quality", tags=["Quality"])
app.include_router(session_router, prefix="/api/session", tags=["Session"])
app.include_router(notes_router, prefix="/api/notes", tags=["Notes"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
