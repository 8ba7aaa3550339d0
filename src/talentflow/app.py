"""
FastAPI application factory and main app configuration.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talentflow.api.deps import get_session_registry
from talentflow.api.errors import error_body, status_for
from talentflow.api.routers import assessments, health, responses, sessions
from talentflow.application.session.session_registry import SessionRegistry
from talentflow.core.config import get_settings
from talentflow.core.logging_setup import configure_logging
from talentflow.domain.errors import DomainError

logger = logging.getLogger("talentflow")


async def sweep_sessions(registry: SessionRegistry, interval_seconds: float) -> None:
    """Periodically drop submitted and idle sessions."""
    while True:
        await asyncio.sleep(interval_seconds)
        registry.evict_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.logging)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s, debug: %s", settings.app_env, settings.debug)

    client = None
    if settings.database.enabled:
        # Initialize database connection (MongoDB + Beanie)
        try:
            from beanie import init_beanie
            from motor.motor_asyncio import AsyncIOMotorClient

            from talentflow.adapters.db.mongo.models.assessment_m import (
                AssessmentMongo,
                AssessmentResponseMongo,
            )

            client = AsyncIOMotorClient(
                settings.database.uri,
                serverSelectionTimeoutMS=settings.database.server_selection_timeout_ms,
            )
            await init_beanie(
                database=client[settings.database.db_name],
                document_models=[AssessmentMongo, AssessmentResponseMongo],
            )
            logger.info("MongoDB/Beanie initialized")
        except Exception as exc:
            logger.warning(
                "Skipping MongoDB init, using the in-memory store (reason: %s)", exc
            )
    else:
        logger.info("MongoDB disabled, using the in-memory store")

    registry = get_session_registry()
    sweeper = asyncio.create_task(
        sweep_sessions(registry, settings.form.session_sweep_interval_seconds)
    )

    yield

    sweeper.cancel()
    registry.close_all()
    if client is not None:
        client.close()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="TalentFlow Assessments",
        description="Conditional-logic and validation engine for candidate assessments",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(assessments.router)
    app.include_router(responses.router)
    app.include_router(sessions.router)

    # Global exception handler for domain errors
    @app.exception_handler(DomainError)
    async def domain_error_handler(request, exc: DomainError):
        return JSONResponse(status_code=status_for(exc), content=error_body(exc))

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled",
            "endpoints": {
                "health": "/health",
                "assessments": "/assessments",
                "evaluate": "POST /assessments/{id}/evaluate",
                "responses": "/responses",
                "sessions": "/sessions",
            },
        }

    return app


# Create the app instance
app = create_app()
