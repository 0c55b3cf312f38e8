"""
Common utilities shared across routers.
"""

from .pagination import (
    Pagination,
    PaginatedResponse,
    get_pagination,
)
from .factory import (
    CatalogRouterConfig,
    ERROR_RESPONSES,
    build_catalog_router,
    paginated_schema,
)

__all__ = [
    # Pagination
    "Pagination",
    "PaginatedResponse",
    "get_pagination",
    # Router factory
    "CatalogRouterConfig",
    "ERROR_RESPONSES",
    "build_catalog_router",
    "paginated_schema",
]
