"""
Utilities module: Exceptions, schemas.
"""

from shared.utils.exceptions import (
    CatalogError,
    NotFoundError,
    ParentNotFoundError,
    DuplicateEntityError,
    DuplicateInScopeError,
    ValidationError,
    StoreUnavailableError,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "CatalogError",
    "NotFoundError",
    "ParentNotFoundError",
    "DuplicateEntityError",
    "DuplicateInScopeError",
    "ValidationError",
    "StoreUnavailableError",
    # schemas
    "ErrorResponse",
]
