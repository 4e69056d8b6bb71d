"""Marketing Workflow Service - FastAPI Application."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from api.v1.router import api_v1_router
from api.routes import health
from db.database import close_db, init_db
from core.logging_config import setup_logging
from core.middleware import RequestTrackingMiddleware, setup_exception_handlers

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    settings = get_settings()
    setup_logging()

    await init_db()
    logger.info("Database ready", url=settings.DATABASE_URL.split("@")[-1])

    logger.info(
        "Service started",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        collection=settings.WORKFLOWS_COLLECTION,
    )
    yield
    await close_db()
    logger.info("Service shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Marketing workflow definitions: step catalog, builder, template library.",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Request tracking middleware
    app.add_middleware(RequestTrackingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Global exception handlers
    setup_exception_handlers(app)

    # Root health check (unversioned, for load balancers / k8s probes)
    app.include_router(health.router, prefix="/api", tags=["Health"])

    # Versioned API: all business endpoints under /api/v1
    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)

    return app


app = create_app()
