"""
Services module for business logic.

ARCHITECTURE:
- base_service.py: LifecycleService, the generic create/read/update/activate/deactivate engine
- hierarchy_service.py: HierarchyService, lifecycle of children inside a parent
- domain/: Application services per entity - USE THESE
- crud/: Repository pattern, specifications, parent/child association helpers

Usage:
    from rest_api.services.domain import AreaService
    service = AreaService(db)
    area = service.create({"name": "Almacen", "locality_id": 1})
"""

from .base_service import LifecycleService
from .hierarchy_service import HierarchyService

__all__ = [
    "LifecycleService",
    "HierarchyService",
]
