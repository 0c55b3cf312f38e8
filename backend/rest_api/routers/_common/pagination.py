"""
Standardized Pagination for all routers.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/localities/paginated")
    def list_localities_paginated(
        pagination: Pagination = Depends(get_pagination),
        db: Session = Depends(get_db),
    ):
        items = service.list_paginated(pagination.limit, pagination.offset)
        return PaginatedResponse(items=items, pagination=pagination, total=service.count()).to_dict()
"""

from dataclasses import dataclass
from typing import Any
from fastapi import Query

from shared.config.constants import Limits
from shared.config.settings import get_settings


@dataclass
class Pagination:
    """
    Pagination parameters with validation.

    Attributes:
        limit: Maximum items per page (1 to max_limit)
        offset: Number of items to skip
        max_limit: Maximum allowed limit (MAX_PAGE_SIZE setting)
    """

    limit: int
    offset: int
    max_limit: int = 200

    def __post_init__(self):
        """Validate and normalize values."""
        self.limit = min(max(1, self.limit), self.max_limit)
        self.offset = max(0, self.offset)

    @property
    def page(self) -> int:
        """Calculate current page number (1-indexed)."""
        return (self.offset // self.limit) + 1

    def to_dict(self, total: int) -> dict[str, Any]:
        """
        Convert to dictionary for response.

        Args:
            total: Total count of items

        Returns:
            Dictionary with pagination metadata
        """
        return {
            "limit": self.limit,
            "offset": self.offset,
            "page": self.page,
            "total": total,
            "pages": (total + self.limit - 1) // self.limit,
            "has_next": self.offset + self.limit < total,
            "has_prev": self.offset > 0,
        }


def get_pagination(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of items to return (capped at MAX_PAGE_SIZE)",
    ),
    offset: int = Query(
        default=Limits.DEFAULT_OFFSET,
        ge=0,
        description="Number of items to skip",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Page size defaults and cap come from DEFAULT_PAGE_SIZE and MAX_PAGE_SIZE.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    config = get_settings()
    return Pagination(
        limit=limit if limit is not None else config.default_page_size,
        offset=offset,
        max_limit=config.max_page_size,
    )


# =============================================================================
# Paginated Response Helper
# =============================================================================


@dataclass
class PaginatedResponse:
    """
    Wrapper for paginated responses.

    Usage:
        items = service.list_paginated(pagination.limit, pagination.offset)
        total = service.count()
        return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()
    """

    items: list[Any]
    pagination: Pagination
    total: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to response dictionary."""
        return {
            "items": self.items,
            "pagination": self.pagination.to_dict(self.total),
        }
