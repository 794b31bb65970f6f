"""
Booksearch - Main Application Entry Point

- FastAPI app with lifespan handler
- uvicorn booksearch.main:app starts the service

Patterns Applied:
- Lifespan context manager
- One-time configure_logging() at startup

Anti-Patterns Avoided:
- Deprecated @app.on_event - using modern lifespan pattern
- structlog.configure() per request - one-time at startup
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booksearch.api.health import get_health_service
from booksearch.api.health import router as health_router
from booksearch.api.search import get_search_engine, search_router
from booksearch.core.config import get_settings
from booksearch.core.logging import configure_logging, get_logger
from booksearch.core.tracing import configure_tracing

settings = get_settings()

# Configure logging ONCE at module load
configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
    service_name=settings.service_name,
)

logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events."""
    # =========================================================================
    # STARTUP
    # =========================================================================
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    app.state.initialized = True
    app.state.environment = settings.environment

    engine = get_search_engine()
    get_health_service().set_engine_ready(True)
    logger.info("search_engine_ready", case_folding=engine.case_folding.value)

    yield

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    logger.info("shutdown", service=settings.service_name)

    get_health_service().set_engine_ready(False)
    app.state.initialized = False


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Booksearch-Service",
    description="Context-window search over course slide and book text",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(search_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing to docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
