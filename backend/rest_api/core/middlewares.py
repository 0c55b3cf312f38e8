"""
Middlewares for the FastAPI application.
Implements security headers, content-type validation and request correlation.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.infrastructure.correlation import CorrelationIdMiddleware


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers added:
    - X-Content-Type-Options: nosniff (prevent MIME sniffing)
    - X-Frame-Options: DENY (prevent clickjacking)
    - Referrer-Policy: strict-origin-when-cross-origin
    - Strict-Transport-Security: HSTS for production
    """

    async def dispatch(self, request: Request, call_next):
        from shared.config.settings import settings

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers.pop("server", None)

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Validate Content-Type for requests with body.

    Ensures POST/PUT/PATCH requests use application/json.
    Returns 415 Unsupported Media Type if invalid.
    """

    METHODS_WITH_BODY = {"POST", "PUT", "PATCH"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.METHODS_WITH_BODY:
            content_type = request.headers.get("content-type", "")
            # PATCH /activate and /deactivate carry no body, hence no content type
            if content_type and not content_type.startswith("application/json"):
                return JSONResponse(
                    status_code=415,
                    content={
                        "detail": "Unsupported Media Type. Use application/json",
                        "error": "unsupported_media_type",
                    },
                )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    """
    Register all middlewares on the FastAPI application.

    Order matters: middlewares are executed in reverse order of registration.
    Correlation runs first so every later log line carries the request ID.
    """
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
