"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.infrastructure.db import engine, SessionLocal
from shared.config.settings import settings
from shared.config.logging import setup_logging, rest_api_logger as logger
from rest_api.models import Base
from rest_api.seed import seed


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    # Validate production configuration before startup
    config_errors = settings.validate_production_settings()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error", error=error)
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(config_errors)}. "
            "Server will not start with insecure configuration."
        )

    # Startup
    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")

    if settings.seed_on_startup:
        with SessionLocal() as db:
            seed(db)

    yield

    # Shutdown
    logger.info("Shutting down REST API")
    engine.dispose()
