"""
CORS (Cross-Origin Resource Sharing) configuration.
Configures allowed origins, methods, and headers for the API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings


# Allowed HTTP methods
ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Allowed request headers
ALLOWED_HEADERS = [
    "Content-Type",
    "X-Request-ID",
    "Accept",
    "Accept-Language",
    "Cache-Control",
]


def configure_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware on the FastAPI application.

    Production: Set ALLOWED_ORIGINS env var (comma-separated).
    Development: Uses default localhost ports automatically.
    """
    # Short max_age in development to avoid preflight cache issues
    max_age = 0 if settings.environment == "development" else 600

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
        max_age=max_age,
    )
