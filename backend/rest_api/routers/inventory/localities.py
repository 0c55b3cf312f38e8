"""
Locality management endpoints.

Thin router that delegates to LocalityService; the cascade purge goes through
AreaService, which owns the locality/area invariants.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from rest_api.routers._common import ERROR_RESPONSES, Pagination, PaginatedResponse, get_pagination
from rest_api.services.domain import AreaService, LocalityService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    ExistsOutput,
    LocalityCreate,
    LocalityDetailOutput,
    LocalityOutput,
    LocalityUpdate,
    PaginatedLocalities,
    PurgeOutput,
)


router = APIRouter(prefix="/localities", tags=["localities"], responses=ERROR_RESPONSES)


def _get_service(db: Session) -> LocalityService:
    """Get LocalityService instance."""
    return LocalityService(db)


@router.get("", response_model=list[LocalityOutput])
def list_localities(db: Session = Depends(get_db)) -> list[LocalityOutput]:
    """List all localities, active or not."""
    return [LocalityOutput.model_validate(loc) for loc in _get_service(db).list_all()]


@router.get("/paginated", response_model=PaginatedLocalities)
def list_localities_paginated(
    pagination: Pagination = Depends(get_pagination),
    order_by: str | None = Query(default=None, description="Field to sort by"),
    db: Session = Depends(get_db),
):
    service = _get_service(db)
    items = service.list_paginated(pagination.limit, pagination.offset, order_by)
    return PaginatedResponse(
        items=[LocalityOutput.model_validate(loc) for loc in items],
        pagination=pagination,
        total=service.count(),
    ).to_dict()


@router.get("/active", response_model=list[LocalityOutput])
def list_active_localities(db: Session = Depends(get_db)) -> list[LocalityOutput]:
    return [LocalityOutput.model_validate(loc) for loc in _get_service(db).list_active()]


@router.get("/search", response_model=list[LocalityOutput])
def search_localities(
    name: str = Query(..., min_length=1, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    db: Session = Depends(get_db),
) -> list[LocalityOutput]:
    """Case-insensitive search by partial name."""
    return [LocalityOutput.model_validate(loc) for loc in _get_service(db).search_by_name(name)]


@router.get("/exists", response_model=ExistsOutput)
def locality_exists(
    name: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
) -> ExistsOutput:
    return ExistsOutput(exists=_get_service(db).exists_by_unique(name))


@router.get("/{locality_id}", response_model=LocalityDetailOutput)
def get_locality(locality_id: int, db: Session = Depends(get_db)) -> LocalityDetailOutput:
    """Get a locality with its areas."""
    return LocalityDetailOutput.model_validate(_get_service(db).get_by_id(locality_id))


@router.post("", response_model=LocalityDetailOutput, status_code=status.HTTP_201_CREATED)
def create_locality(body: LocalityCreate, db: Session = Depends(get_db)) -> LocalityDetailOutput:
    """Create a locality, optionally with its initial areas."""
    locality = _get_service(db).create(body.model_dump())
    return LocalityDetailOutput.model_validate(locality)


@router.put("/{locality_id}", response_model=LocalityOutput)
def update_locality(
    locality_id: int,
    body: LocalityUpdate,
    db: Session = Depends(get_db),
) -> LocalityOutput:
    """Full replace of the locality fields. Areas are not affected."""
    locality = _get_service(db).update(locality_id, body.model_dump(exclude_unset=True))
    return LocalityOutput.model_validate(locality)


@router.patch("/{locality_id}/activate", response_model=LocalityOutput)
def activate_locality(locality_id: int, db: Session = Depends(get_db)) -> LocalityOutput:
    return LocalityOutput.model_validate(_get_service(db).activate(locality_id))


@router.patch("/{locality_id}/deactivate", response_model=LocalityOutput)
def deactivate_locality(locality_id: int, db: Session = Depends(get_db)) -> LocalityOutput:
    """Deactivate the locality. Its areas keep their own state."""
    return LocalityOutput.model_validate(_get_service(db).deactivate(locality_id))


@router.delete("/{locality_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_locality(locality_id: int, db: Session = Depends(get_db)) -> Response:
    """Soft delete (deactivation)."""
    _get_service(db).soft_delete(locality_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{locality_id}/purge", response_model=PurgeOutput)
def purge_locality(locality_id: int, db: Session = Depends(get_db)) -> PurgeOutput:
    """Permanently remove the locality and all of its areas."""
    removed = AreaService(db).delete_parent(locality_id)
    return PurgeOutput(locality_id=locality_id, removed_areas=removed)
