"""
Generic router factory for flat catalogs.

Builds the standard endpoint set (list, paginated, active, search, exists,
get, create, update, activate, deactivate, soft delete) for one entity from a
``CatalogRouterConfig``. Entity-specific endpoints are added through
``extend`` so they are registered before the ``/{entity_id}`` routes.

Usage:
    router = build_catalog_router(
        CatalogRouterConfig(
            prefix="/mills",
            tag="mills",
            service_class=MillService,
            output_schema=CatalogOutput,
            create_schema=CatalogCreate,
            update_schema=CatalogUpdate,
        )
    )
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, create_model
from sqlalchemy.orm import Session

from rest_api.routers._common.pagination import Pagination, PaginatedResponse, get_pagination
from rest_api.services.base_service import LifecycleService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.schemas import ErrorResponse, ExistsOutput, PaginationMeta


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


@dataclass
class CatalogRouterConfig:
    """Configuration for one generated catalog router."""

    prefix: str
    tag: str
    service_class: Callable[[Session], LifecycleService]
    output_schema: type[BaseModel]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    # Query parameter used by /search and /exists
    unique_param: str = "name"


@lru_cache
def paginated_schema(output_schema: type[BaseModel]) -> type[BaseModel]:
    """Response model for a page of ``output_schema`` items."""
    return create_model(
        f"Paginated{output_schema.__name__}",
        items=(list[output_schema], ...),
        pagination=(PaginationMeta, ...),
    )


def build_catalog_router(
    config: CatalogRouterConfig,
    extend: Callable[[APIRouter], None] | None = None,
) -> APIRouter:
    """Create the standard endpoint set for ``config``."""
    router = APIRouter(prefix=config.prefix, tags=[config.tag], responses=ERROR_RESPONSES)
    output = config.output_schema
    create_schema = config.create_schema
    update_schema = config.update_schema

    def to_output(entity: Any) -> BaseModel:
        return output.model_validate(entity)

    @router.get("", response_model=list[output])
    def list_all(db: Session = Depends(get_db)):
        """List every entity, active or not."""
        return [to_output(e) for e in config.service_class(db).list_all()]

    @router.get("/paginated", response_model=paginated_schema(output))
    def list_paginated(
        pagination: Pagination = Depends(get_pagination),
        order_by: str | None = Query(default=None, description="Field to sort by"),
        db: Session = Depends(get_db),
    ):
        service = config.service_class(db)
        items = service.list_paginated(pagination.limit, pagination.offset, order_by)
        return PaginatedResponse(
            items=[to_output(e) for e in items],
            pagination=pagination,
            total=service.count(),
        ).to_dict()

    @router.get("/active", response_model=list[output])
    def list_active(db: Session = Depends(get_db)):
        return [to_output(e) for e in config.service_class(db).list_active()]

    @router.get("/search", response_model=list[output])
    def search(
        name: str = Query(
            ..., alias=config.unique_param, min_length=1, max_length=Limits.MAX_SEARCH_TERM_LENGTH
        ),
        db: Session = Depends(get_db),
    ):
        """Case-insensitive contains search."""
        return [to_output(e) for e in config.service_class(db).search_by_name(name)]

    @router.get("/exists", response_model=ExistsOutput)
    def exists(
        name: str = Query(..., alias=config.unique_param, min_length=1),
        db: Session = Depends(get_db),
    ):
        return ExistsOutput(exists=config.service_class(db).exists_by_unique(name))

    if extend is not None:
        extend(router)

    @router.get("/{entity_id}", response_model=output)
    def get_one(entity_id: int, db: Session = Depends(get_db)):
        return to_output(config.service_class(db).get_by_id(entity_id))

    @router.post("", response_model=output, status_code=status.HTTP_201_CREATED)
    def create(body: create_schema, db: Session = Depends(get_db)):
        return to_output(config.service_class(db).create(body.model_dump()))

    @router.put("/{entity_id}", response_model=output)
    def update(entity_id: int, body: update_schema, db: Session = Depends(get_db)):
        """Full replace: omitted optional fields are cleared."""
        return to_output(
            config.service_class(db).update(entity_id, body.model_dump(exclude_unset=True))
        )

    @router.patch("/{entity_id}/activate", response_model=output)
    def activate(entity_id: int, db: Session = Depends(get_db)):
        return to_output(config.service_class(db).activate(entity_id))

    @router.patch("/{entity_id}/deactivate", response_model=output)
    def deactivate(entity_id: int, db: Session = Depends(get_db)):
        return to_output(config.service_class(db).deactivate(entity_id))

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    def soft_delete(entity_id: int, db: Session = Depends(get_db)):
        """Deactivates the entity; nothing is removed."""
        config.service_class(db).soft_delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
