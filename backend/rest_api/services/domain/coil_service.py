"""
Coil Service.

A coil references one type, class, mill, grade and supplier. References are
checked on create and update so a dangling id fails with a clear error
naming the field instead of a foreign-key violation.
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.orm import Session

from rest_api.models import Coil
from rest_api.services.base_service import LifecycleService
from rest_api.services.crud.repository import EqualsSpec, RangeSpec
from rest_api.services.domain.catalog_services import (
    GradeService,
    MillService,
    ProductClassService,
    ProductTypeService,
    SupplierService,
)
from shared.config.constants import EntityNames
from shared.utils.exceptions import ParentNotFoundError, ValidationError


class CoilService(LifecycleService[Coil]):
    """Service for coil management."""

    # field -> catalog service resolving it
    REFERENCES = {
        "type_id": ProductTypeService,
        "class_id": ProductClassService,
        "mill_id": MillService,
        "grade_id": GradeService,
        "supplier_id": SupplierService,
    }

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Coil,
            entity_name=EntityNames.COIL,
            unique_field="supplier_code",
            unique_key=Coil.supplier_code_key,
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_by_supplier(self, supplier_id: int) -> Sequence[Coil]:
        return self._repo.find_by_spec(EqualsSpec(Coil.supplier_id, supplier_id))

    def list_by_type(self, type_id: int) -> Sequence[Coil]:
        return self._repo.find_by_spec(EqualsSpec(Coil.type_id, type_id))

    def list_by_class(self, class_id: int) -> Sequence[Coil]:
        return self._repo.find_by_spec(EqualsSpec(Coil.class_id, class_id))

    def list_by_mill(self, mill_id: int) -> Sequence[Coil]:
        return self._repo.find_by_spec(EqualsSpec(Coil.mill_id, mill_id))

    def list_by_grade(self, grade_id: int) -> Sequence[Coil]:
        return self._repo.find_by_spec(EqualsSpec(Coil.grade_id, grade_id))

    def list_by_width_range(self, minimum: float | None, maximum: float | None) -> Sequence[Coil]:
        self._check_range(minimum, maximum, "width")
        return self._repo.find_by_spec(RangeSpec(Coil.width, minimum, maximum), order_by=Coil.width)

    def list_by_grammage_range(self, minimum: float | None, maximum: float | None) -> Sequence[Coil]:
        self._check_range(minimum, maximum, "grammage")
        return self._repo.find_by_spec(
            RangeSpec(Coil.grammage, minimum, maximum), order_by=Coil.grammage
        )

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._validate_references(data)

    def _validate_update(self, entity: Coil, data: dict[str, Any]) -> None:
        self._validate_references(data)

    def _validate_references(self, data: dict[str, Any]) -> None:
        for field, service_cls in self.REFERENCES.items():
            ref_id = data.get(field)
            if ref_id is None:
                continue  # reported as a missing required field
            service = service_cls(self._db)
            if service.find(ref_id) is None:
                raise ParentNotFoundError(service.entity_name, ref_id, field=field)

    @staticmethod
    def _check_range(minimum: float | None, maximum: float | None, field: str) -> None:
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValidationError(
                f"Rango inválido para '{field}': mínimo {minimum} mayor que máximo {maximum}",
                field=field,
            )
