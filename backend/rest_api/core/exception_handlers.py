"""
Exception handlers: the only place domain errors become HTTP responses.

Every handled error answers with ``{"detail": str, "error": kind}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared.utils.exceptions import (
    CatalogError,
    DuplicateEntityError,
    NotFoundError,
    ParentNotFoundError,
    StoreUnavailableError,
    ValidationError,
)

# Most specific class first; DuplicateInScopeError is a DuplicateEntityError
STATUS_BY_ERROR: list[tuple[type[CatalogError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ParentNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: CatalogError) -> int:
    for error_cls, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Translate a domain error into its HTTP response."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": exc.detail, "error": exc.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the FastAPI application."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
