"""
Seed data for development and testing.
Creates sample localities with their areas and the product catalogs.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Grade, Locality, Mill, ProductClass, ProductType, Supplier
from rest_api.services.domain import (
    GradeService,
    LocalityService,
    MillService,
    ProductClassService,
    ProductTypeService,
    SupplierService,
)
from shared.config.logging import get_logger

logger = get_logger(__name__)


SEED_LOCALITIES = [
    {"name": "CDMX", "areas": [{"name": "Almacen"}, {"name": "Produccion"}, {"name": "Embarques"}]},
    {"name": "Guadalajara", "areas": [{"name": "Almacen"}, {"name": "Corrugadora"}]},
]

SEED_CATALOGS = [
    (ProductTypeService, ProductType, [
        {"name": "Kraft", "description": "Papel kraft natural"},
        {"name": "Blanco", "description": "Papel blanqueado"},
    ]),
    (ProductClassService, ProductClass, [
        {"name": "Liner", "description": "Papel para caras de cartón"},
        {"name": "Medium", "description": "Papel para flauta"},
    ]),
    (MillService, Mill, [
        {"name": "Molino Norte"},
        {"name": "Molino Bajío"},
    ]),
    (GradeService, Grade, [
        {"name": "Grado A", "description": "Primera calidad"},
        {"name": "Grado B", "description": "Segunda calidad"},
    ]),
    (SupplierService, Supplier, [
        {
            "name": "Papelera del Norte",
            "business_name": "Papelera del Norte S.A. de C.V.",
            "tax_id": "PNO010101AAA",
            "country": "México",
            "state": "Nuevo León",
            "city": "Monterrey",
        },
    ]),
]


def seed_localities(db: Session) -> int:
    """
    Seed localities with their areas.
    Idempotent: only inserts if no locality exists.
    """
    if db.scalar(select(Locality.id).limit(1)):
        logger.info("Localities already seeded, skipping")
        return 0

    service = LocalityService(db)
    for data in SEED_LOCALITIES:
        service.create(data)
    logger.info("Localities seeded", count=len(SEED_LOCALITIES))
    return len(SEED_LOCALITIES)


def seed_catalogs(db: Session) -> int:
    """
    Seed product catalogs (type, class, mill, grade, supplier).
    Idempotent per catalog.
    """
    created = 0
    for service_cls, model, rows in SEED_CATALOGS:
        if db.scalar(select(model.id).limit(1)):
            continue
        service = service_cls(db)
        for data in rows:
            service.create(data)
            created += 1
    logger.info("Catalogs seeded", count=created)
    return created


def seed(db: Session) -> None:
    """Seed all sample data."""
    seed_localities(db)
    seed_catalogs(db)
