"""
Domain Services - application layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import AreaService

    # In router
    service = AreaService(db)
    areas = service.list_by_parent(locality_id)
"""

from .locality_service import LocalityService
from .area_service import AreaService
from .catalog_services import (
    NamedCatalogService,
    ProductTypeService,
    ProductClassService,
    MillService,
    GradeService,
    SupplierService,
)
from .coil_service import CoilService

__all__ = [
    # Inventory
    "LocalityService",
    "AreaService",
    # Product catalogs
    "NamedCatalogService",
    "ProductTypeService",
    "ProductClassService",
    "MillService",
    "GradeService",
    "SupplierService",
    "CoilService",
]
