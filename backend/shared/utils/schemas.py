"""
Shared Pydantic schemas used across the application.

Output schemas are built from ORM entities (``from_attributes``). Update
schemas declare every field optional so that a full-replace request missing a
required field reaches the service layer, which rejects it with a
``ValidationError`` instead of a framework-level 422.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from shared.config.constants import Limits


NameStr = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=Limits.MIN_NAME_LENGTH,
        max_length=Limits.MAX_NAME_LENGTH,
    ),
]


# =============================================================================
# Common
# =============================================================================


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    detail: str
    error: str


class ExistsOutput(BaseModel):
    exists: bool


class CountOutput(BaseModel):
    count: int


class PaginationMeta(BaseModel):
    limit: int
    offset: int
    page: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


# =============================================================================
# Area Schemas
# =============================================================================


class AreaOutput(BaseModel):
    id: int
    name: str
    is_active: bool
    locality_id: int
    locality_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class AreaNested(BaseModel):
    """Area declared inline while creating its locality."""

    name: NameStr
    is_active: bool = True


class AreaCreate(BaseModel):
    name: NameStr
    locality_id: int = Field(gt=0)
    is_active: bool = True


class AreaUpdate(BaseModel):
    # locality_id is accepted but never moves the area to another locality
    name: NameStr | None = None
    locality_id: int | None = None
    is_active: bool | None = None


# =============================================================================
# Locality Schemas
# =============================================================================


class LocalityOutput(BaseModel):
    id: int
    name: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class AreaSummary(BaseModel):
    id: int
    name: str
    is_active: bool

    class Config:
        from_attributes = True


class LocalityDetailOutput(LocalityOutput):
    """Locality with its areas."""

    areas: list[AreaSummary] = []


class LocalityCreate(BaseModel):
    name: NameStr
    is_active: bool = True
    areas: list[AreaNested] | None = None


class LocalityUpdate(BaseModel):
    name: NameStr | None = None
    is_active: bool | None = None


class PurgeOutput(BaseModel):
    """Result of hard-deleting a locality together with its areas."""

    locality_id: int
    removed_areas: int


class PaginatedLocalities(BaseModel):
    items: list[LocalityOutput]
    pagination: PaginationMeta


class PaginatedAreas(BaseModel):
    items: list[AreaOutput]
    pagination: PaginationMeta


# =============================================================================
# Product Catalog Schemas (type, class, mill, grade)
# =============================================================================


class CatalogOutput(BaseModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CatalogCreate(BaseModel):
    name: NameStr
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    is_active: bool = True


class CatalogUpdate(BaseModel):
    name: NameStr | None = None
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    is_active: bool | None = None


# =============================================================================
# Supplier Schemas
# =============================================================================


class SupplierOutput(BaseModel):
    id: int
    name: str
    business_name: str | None = None
    tax_id: str | None = None
    phone: str | None = None
    email: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    is_active: bool

    class Config:
        from_attributes = True


class SupplierCreate(BaseModel):
    name: NameStr
    business_name: str | None = Field(default=None, max_length=200)
    tax_id: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=30)
    email: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=80)
    state: str | None = Field(default=None, max_length=80)
    city: str | None = Field(default=None, max_length=80)
    is_active: bool = True


class SupplierUpdate(BaseModel):
    name: NameStr | None = None
    business_name: str | None = Field(default=None, max_length=200)
    tax_id: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=30)
    email: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=80)
    state: str | None = Field(default=None, max_length=80)
    city: str | None = Field(default=None, max_length=80)
    is_active: bool | None = None


# =============================================================================
# Coil Schemas
# =============================================================================


class CoilOutput(BaseModel):
    id: int
    supplier_code: str
    width: float
    grammage: float
    weight: float
    caliber: str | None = None
    type_id: int
    class_id: int
    mill_id: int
    grade_id: int
    supplier_id: int
    is_active: bool

    class Config:
        from_attributes = True


class CoilCreate(BaseModel):
    supplier_code: str = Field(min_length=1, max_length=Limits.MAX_CODE_LENGTH)
    width: float = Field(gt=0)
    grammage: float = Field(gt=0)
    weight: float = Field(gt=0)
    caliber: str | None = Field(default=None, max_length=Limits.MAX_CALIBER_LENGTH)
    type_id: int
    class_id: int
    mill_id: int
    grade_id: int
    supplier_id: int
    is_active: bool = True


class CoilUpdate(BaseModel):
    supplier_code: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_CODE_LENGTH)
    width: float | None = Field(default=None, gt=0)
    grammage: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    caliber: str | None = Field(default=None, max_length=Limits.MAX_CALIBER_LENGTH)
    type_id: int | None = None
    class_id: int | None = None
    mill_id: int | None = None
    grade_id: int | None = None
    supplier_id: int | None = None
    is_active: bool | None = None
