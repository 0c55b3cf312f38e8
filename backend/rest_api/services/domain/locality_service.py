"""
Locality Service.

Usage:
    from rest_api.services.domain import LocalityService

    service = LocalityService(db)
    locality = service.create({"name": "CDMX", "areas": [{"name": "Almacen"}]})
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Area, Locality, normalize_key
from rest_api.services.base_service import LifecycleService
from rest_api.services.crud.hierarchy import LOCALITY_AREAS, attach_child
from rest_api.services.crud.repository import BaseRepository, store_errors
from shared.config.constants import EntityNames
from shared.utils.exceptions import DuplicateInScopeError, ValidationError


class LocalityService(LifecycleService[Locality]):
    """
    Service for locality management.

    Business rules:
    - Locality names are unique (case-insensitive)
    - Initial areas may be given on create; they are stored with the locality
    - Deactivating a locality leaves its areas untouched
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Locality,
            entity_name=EntityNames.LOCALITY,
            unique_field="name",
            unique_key=Locality.name_key,
            repository=BaseRepository(
                Locality, db, relations=(LOCALITY_AREAS.collection,)
            ),
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Reject repeated names in the initial area list."""
        seen: set[str] = set()
        for area in data.get("areas") or []:
            name = area.get("name")
            if not name:
                raise ValidationError(
                    f"El campo 'name' es obligatorio para {EntityNames.AREA}",
                    field="areas.name",
                )
            key = normalize_key(name)
            if key in seen:
                raise DuplicateInScopeError(EntityNames.AREA, name, EntityNames.LOCALITY)
            seen.add(key)

    def _before_create(self, entity: Locality, data: dict[str, Any]) -> None:
        with store_errors(self._db, "load_children"):
            for area_data in data.get("areas") or []:
                area = Area(name=area_data["name"], is_active=area_data.get("is_active", True))
                attach_child(entity, area, LOCALITY_AREAS)
