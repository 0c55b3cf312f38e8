"""
Health check endpoints for the REST API.
Provides basic and detailed health status of the service and its database.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import rest_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": "rest-api",
        "environment": settings.environment,
    }


@router.get("/health/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Detailed health check that verifies database connectivity.

    Returns 503 Service Unavailable if the database is down.
    """
    checks = {
        "service": "rest-api",
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return checks
