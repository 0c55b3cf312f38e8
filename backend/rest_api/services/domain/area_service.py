"""
Area Service.

Areas always live inside a locality. Their names are unique per locality,
ignoring case, whether the area is active or not.

Usage:
    from rest_api.services.domain import AreaService

    service = AreaService(db)
    area = service.create({"name": "Almacen", "locality_id": 1})
    removed = service.delete_parent(1)  # purge locality 1 and its areas
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Area
from rest_api.services.crud.hierarchy import LOCALITY_AREAS
from rest_api.services.domain.locality_service import LocalityService
from rest_api.services.hierarchy_service import HierarchyService
from shared.config.constants import EntityNames


class AreaService(HierarchyService[Area]):
    """Service for area management."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Area,
            entity_name=EntityNames.AREA,
            parent_service=LocalityService(db),
            parent_key="locality_id",
            association=LOCALITY_AREAS,
        )
