"""
Product catalog endpoints: types, classes, mills, grades, suppliers.

All five share one endpoint set generated by ``build_catalog_router``.
"""

from rest_api.routers._common import CatalogRouterConfig, build_catalog_router
from rest_api.services.domain import (
    GradeService,
    MillService,
    ProductClassService,
    ProductTypeService,
    SupplierService,
)
from shared.utils.schemas import (
    CatalogCreate,
    CatalogOutput,
    CatalogUpdate,
    SupplierCreate,
    SupplierOutput,
    SupplierUpdate,
)


CATALOG_ROUTERS = [
    CatalogRouterConfig(
        prefix="/product-types",
        tag="product-types",
        service_class=ProductTypeService,
        output_schema=CatalogOutput,
        create_schema=CatalogCreate,
        update_schema=CatalogUpdate,
    ),
    CatalogRouterConfig(
        prefix="/product-classes",
        tag="product-classes",
        service_class=ProductClassService,
        output_schema=CatalogOutput,
        create_schema=CatalogCreate,
        update_schema=CatalogUpdate,
    ),
    CatalogRouterConfig(
        prefix="/mills",
        tag="mills",
        service_class=MillService,
        output_schema=CatalogOutput,
        create_schema=CatalogCreate,
        update_schema=CatalogUpdate,
    ),
    CatalogRouterConfig(
        prefix="/grades",
        tag="grades",
        service_class=GradeService,
        output_schema=CatalogOutput,
        create_schema=CatalogCreate,
        update_schema=CatalogUpdate,
    ),
    CatalogRouterConfig(
        prefix="/suppliers",
        tag="suppliers",
        service_class=SupplierService,
        output_schema=SupplierOutput,
        create_schema=SupplierCreate,
        update_schema=SupplierUpdate,
    ),
]

routers = [build_catalog_router(config) for config in CATALOG_ROUTERS]
