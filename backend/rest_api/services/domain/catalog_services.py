"""
Product catalog services: type, class, mill, grade, supplier.

All five are flat catalogs with a globally unique name; they differ only in
model and display name.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Grade, Mill, ProductClass, ProductType, Supplier
from rest_api.services.base_service import LifecycleService
from shared.config.constants import EntityNames


class NamedCatalogService(LifecycleService):
    """Lifecycle service for a catalog whose ``name`` is globally unique."""

    model_class: type = None
    display_name: str = ""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=self.model_class,
            entity_name=self.display_name,
            unique_field="name",
            unique_key=self.model_class.name_key,
        )


class ProductTypeService(NamedCatalogService):
    model_class = ProductType
    display_name = EntityNames.PRODUCT_TYPE


class ProductClassService(NamedCatalogService):
    model_class = ProductClass
    display_name = EntityNames.PRODUCT_CLASS


class MillService(NamedCatalogService):
    model_class = Mill
    display_name = EntityNames.MILL


class GradeService(NamedCatalogService):
    model_class = Grade
    display_name = EntityNames.GRADE


class SupplierService(NamedCatalogService):
    model_class = Supplier
    display_name = EntityNames.SUPPLIER
