"""
Area management endpoints.

Thin router that delegates to AreaService.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from rest_api.routers._common import ERROR_RESPONSES, Pagination, PaginatedResponse, get_pagination
from rest_api.services.domain import AreaService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    AreaCreate,
    AreaOutput,
    AreaUpdate,
    CountOutput,
    PaginatedAreas,
)


router = APIRouter(prefix="/areas", tags=["areas"], responses=ERROR_RESPONSES)


def _get_service(db: Session) -> AreaService:
    """Get AreaService instance."""
    return AreaService(db)


def _to_output(areas) -> list[AreaOutput]:
    return [AreaOutput.model_validate(a) for a in areas]


@router.get("", response_model=list[AreaOutput])
def list_areas(db: Session = Depends(get_db)) -> list[AreaOutput]:
    """List all areas of every locality, active or not."""
    return _to_output(_get_service(db).list_all())


@router.get("/paginated", response_model=PaginatedAreas)
def list_areas_paginated(
    pagination: Pagination = Depends(get_pagination),
    order_by: str | None = Query(default=None, description="Field to sort by"),
    db: Session = Depends(get_db),
):
    service = _get_service(db)
    items = service.list_paginated(pagination.limit, pagination.offset, order_by)
    return PaginatedResponse(
        items=_to_output(items),
        pagination=pagination,
        total=service.count(),
    ).to_dict()


@router.get("/active", response_model=list[AreaOutput])
def list_active_areas(db: Session = Depends(get_db)) -> list[AreaOutput]:
    return _to_output(_get_service(db).list_active())


@router.get("/search", response_model=list[AreaOutput])
def search_areas(
    name: str = Query(..., min_length=1, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    db: Session = Depends(get_db),
) -> list[AreaOutput]:
    """Case-insensitive search by partial name, across all localities."""
    return _to_output(_get_service(db).search_by_name(name))


@router.get("/locality/{locality_id}", response_model=list[AreaOutput])
def list_areas_by_locality(locality_id: int, db: Session = Depends(get_db)) -> list[AreaOutput]:
    return _to_output(_get_service(db).list_by_parent(locality_id))


@router.get("/locality/{locality_id}/count", response_model=CountOutput)
def count_areas_by_locality(locality_id: int, db: Session = Depends(get_db)) -> CountOutput:
    return CountOutput(count=_get_service(db).count_by_parent(locality_id))


@router.get("/{area_id}", response_model=AreaOutput)
def get_area(area_id: int, db: Session = Depends(get_db)) -> AreaOutput:
    return AreaOutput.model_validate(_get_service(db).get_by_id(area_id))


@router.post("", response_model=AreaOutput, status_code=status.HTTP_201_CREATED)
def create_area(body: AreaCreate, db: Session = Depends(get_db)) -> AreaOutput:
    """Create an area inside an existing locality."""
    area = _get_service(db).create_child(body.locality_id, body.model_dump())
    return AreaOutput.model_validate(area)


@router.put("/{area_id}", response_model=AreaOutput)
def update_area(area_id: int, body: AreaUpdate, db: Session = Depends(get_db)) -> AreaOutput:
    """
    Full replace of the area fields.
    A different locality_id in the body is ignored: areas never change locality.
    """
    area = _get_service(db).update_child(area_id, body.model_dump(exclude_unset=True))
    return AreaOutput.model_validate(area)


@router.patch("/{area_id}/activate", response_model=AreaOutput)
def activate_area(area_id: int, db: Session = Depends(get_db)) -> AreaOutput:
    return AreaOutput.model_validate(_get_service(db).activate(area_id))


@router.patch("/{area_id}/deactivate", response_model=AreaOutput)
def deactivate_area(area_id: int, db: Session = Depends(get_db)) -> AreaOutput:
    return AreaOutput.model_validate(_get_service(db).deactivate(area_id))


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_area(area_id: int, db: Session = Depends(get_db)) -> Response:
    """Soft delete (deactivation)."""
    _get_service(db).soft_delete(area_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
