"""
Inventory Models: Locality, Area.

A locality owns its areas. Area names are unique only within their locality.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdType, NamedMixin, StatusMixin


class Locality(StatusMixin, NamedMixin, Base):
    """
    Physical site (plant, warehouse) containing areas.
    Inherits: is_active, created_at, updated_at from StatusMixin; name, name_key from NamedMixin.
    """

    __tablename__ = "locality"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)

    # Only mutate through rest_api.services.crud.hierarchy
    areas: Mapped[list["Area"]] = relationship(
        back_populates="locality",
        cascade="all, delete-orphan",
        order_by="Area.id",
    )

    __table_args__ = (
        UniqueConstraint("name_key", name="uq_locality_name_key"),
    )


class Area(StatusMixin, NamedMixin, Base):
    """
    Area inside a locality.
    Inherits: is_active, created_at, updated_at from StatusMixin; name, name_key from NamedMixin.
    """

    __tablename__ = "area"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    locality_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("locality.id", ondelete="CASCADE"), nullable=False, index=True
    )

    locality: Mapped["Locality"] = relationship(back_populates="areas")

    __table_args__ = (
        # Case-insensitive name unique per locality
        UniqueConstraint("locality_id", "name_key", name="uq_area_locality_name_key"),
    )

    @property
    def locality_name(self) -> Optional[str]:
        return self.locality.name if self.locality is not None else None
