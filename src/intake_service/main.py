"""
Intake Service - Main Application
=================================

Support request intake with keyword-based categorization.

Modules:
- Intakes: public submission, staff review, statistics

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects, classifier
- Infrastructure: Database
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configuration
from intake_service.config import Settings, get_settings

# Infrastructure
from intake_service.infrastructure.database import Database

# Domain
from intake_service.intakes.domain import KeywordClassifier

# Module Routers
from intake_service.intakes.interfaces import intake_router

# Shared
from intake_service.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    register_exception_handlers,
)
from intake_service.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, configure_logging: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted
        configure_logging: Install the JSON log handler on startup

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        """
        Application lifespan manager.

        STARTUP:
        1. Setup structured logging
        2. Initialize database
        3. Create database tables

        SHUTDOWN:
        1. Close database connections
        """
        # === STARTUP ===
        if configure_logging:
            setup_logging(settings.log_level, settings.environment)
        logger.info("Starting Intake Service", extra={
            "version": settings.app_version,
            "environment": settings.environment
        })

        database = Database(settings)
        logger.info("Creating database tables")
        await database.create_tables()
        app.state.database = database

        logger.info("Intake Service started successfully")

        yield  # Application runs here

        # === SHUTDOWN ===
        logger.info("Shutting down Intake Service")
        await database.close()
        logger.info("Intake Service shutdown complete")

    app = FastAPI(
        title="Intake Service API",
        description="""
    ## Support Request Intake

    Clients submit free-text requests; each is categorized on arrival
    (billing, technical_support, new_matter_project, other) and reviewed
    by staff.

    **Endpoints:**
    - `POST /api/intakes` - Submit an intake (public)
    - `GET /api/intakes` - List with `status`, `category`, `sort` (staff)
    - `GET /api/intakes/{id}` - Get one intake (staff)
    - `PATCH /api/intakes/{id}` - Update status / internal notes (staff)
    - `GET /api/intakes/stats` - Counts by status and category (staff)

    Staff endpoints use HTTP Basic authentication.
    """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # Explicit collaborators for request handlers
    app.state.settings = settings
    app.state.classifier = KeywordClassifier()

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Custom Middleware (from shared) ===
    # Added last runs first: correlation id must exist before logging reads it
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    register_exception_handlers(app)

    # === Include Module Routers ===
    app.include_router(intake_router)

    # === Health Check Endpoint ===

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and orchestrators."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {
                "database": "connected" if getattr(app.state, "database", None) else "not_initialized"
            }
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health",
            "modules": {
                "intakes": {
                    "prefix": "/api/intakes",
                    "endpoints": [
                        "POST /api/intakes - Submit intake",
                        "GET /api/intakes - List intakes",
                        "GET /api/intakes/{id} - Get intake",
                        "PATCH /api/intakes/{id} - Update intake",
                        "GET /api/intakes/stats - Get statistics"
                    ]
                }
            }
        }

    return app


# === Development Entry Point ===

def run() -> None:
    """Console entry point: serve with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "intake_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
