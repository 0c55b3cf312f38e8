"""
Coil endpoints.

The standard catalog set plus lookups by reference and by measure range.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.routers._common import CatalogRouterConfig, build_catalog_router
from rest_api.services.domain import CoilService
from shared.infrastructure.db import get_db
from shared.utils.schemas import CoilCreate, CoilOutput, CoilUpdate


def _outputs(coils) -> list[CoilOutput]:
    return [CoilOutput.model_validate(c) for c in coils]


def _coil_lookups(router: APIRouter) -> None:
    @router.get("/supplier/{supplier_id}", response_model=list[CoilOutput])
    def list_by_supplier(supplier_id: int, db: Session = Depends(get_db)):
        return _outputs(CoilService(db).list_by_supplier(supplier_id))

    @router.get("/type/{type_id}", response_model=list[CoilOutput])
    def list_by_type(type_id: int, db: Session = Depends(get_db)):
        return _outputs(CoilService(db).list_by_type(type_id))

    @router.get("/class/{class_id}", response_model=list[CoilOutput])
    def list_by_class(class_id: int, db: Session = Depends(get_db)):
        return _outputs(CoilService(db).list_by_class(class_id))

    @router.get("/mill/{mill_id}", response_model=list[CoilOutput])
    def list_by_mill(mill_id: int, db: Session = Depends(get_db)):
        return _outputs(CoilService(db).list_by_mill(mill_id))

    @router.get("/grade/{grade_id}", response_model=list[CoilOutput])
    def list_by_grade(grade_id: int, db: Session = Depends(get_db)):
        return _outputs(CoilService(db).list_by_grade(grade_id))

    @router.get("/width", response_model=list[CoilOutput])
    def list_by_width(
        min: float | None = Query(default=None, ge=0),
        max: float | None = Query(default=None, ge=0),
        db: Session = Depends(get_db),
    ):
        """Coils whose width falls in [min, max]; either bound may be omitted."""
        return _outputs(CoilService(db).list_by_width_range(min, max))

    @router.get("/grammage", response_model=list[CoilOutput])
    def list_by_grammage(
        min: float | None = Query(default=None, ge=0),
        max: float | None = Query(default=None, ge=0),
        db: Session = Depends(get_db),
    ):
        return _outputs(CoilService(db).list_by_grammage_range(min, max))


router = build_catalog_router(
    CatalogRouterConfig(
        prefix="/coils",
        tag="coils",
        service_class=CoilService,
        output_schema=CoilOutput,
        create_schema=CoilCreate,
        update_schema=CoilUpdate,
        unique_param="supplier_code",
    ),
    extend=_coil_lookups,
)
