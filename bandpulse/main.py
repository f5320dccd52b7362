"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error middleware (centralized error-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration
- Store schema on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from bandpulse.core.config import settings
from bandpulse.infrastructure.database import get_engine, init_schema
from bandpulse.interfaces.artists.dependencies import get_musicbrainz_client
from bandpulse.interfaces.artists.router import router as artists_router
from bandpulse.interfaces.health import router as health_router
from bandpulse.shared.errors.handlers import register_error_handlers
from bandpulse.shared.logging import configure_logging
from bandpulse.shared.security.headers import SecurityHeadersMiddleware
from bandpulse.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the store, release connections on shutdown."""
    engine = get_engine()
    init_schema(engine)
    logger.info(
        "%s %s started (environment=%s)",
        settings.project_name,
        settings.version,
        settings.environment,
    )

    yield

    engine.dispose()
    if get_musicbrainz_client.cache_info().currsize:
        get_musicbrainz_client().close()
    logger.info("Database and MusicBrainz connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Error Handlers (first, so the catch-all middleware is innermost) ---
    register_error_handlers(app, production=settings.is_production)

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(artists_router, prefix="/api/v1")

    return app


app = create_app()
