"""
CRUD building blocks shared by the lifecycle services.

Provides:
- Repository Pattern: type-safe data access, parent-scoped queries
- Specifications: composable query conditions
- store_errors: maps store connectivity failures to StoreUnavailableError
- Association helpers: the only code path that links or unlinks a child
"""

from .repository import (
    BaseRepository,
    ScopedRepository,
    Specification,
    AndSpecification,
    OrSpecification,
    NotSpecification,
    ActiveSpec,
    EqualsSpec,
    NameContainsSpec,
    RangeSpec,
    store_errors,
)
from .hierarchy import Association, attach_child, detach_child, LOCALITY_AREAS

__all__ = [
    # Repository Pattern
    "BaseRepository",
    "ScopedRepository",
    "store_errors",
    # Specifications
    "Specification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "ActiveSpec",
    "EqualsSpec",
    "NameContainsSpec",
    "RangeSpec",
    # Parent/child association
    "Association",
    "attach_child",
    "detach_child",
    "LOCALITY_AREAS",
]
