"""
Product Catalog Models: ProductType, ProductClass, Mill, Grade, Supplier, Coil.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shared.config.constants import Limits

from .base import Base, IdType, NamedMixin, StatusMixin, normalize_key


class ProductType(StatusMixin, NamedMixin, Base):
    """Paper type (tipo)."""

    __tablename__ = "product_type"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    description: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_DESCRIPTION_LENGTH))

    __table_args__ = (UniqueConstraint("name_key", name="uq_product_type_name_key"),)


class ProductClass(StatusMixin, NamedMixin, Base):
    """Paper class (clase)."""

    __tablename__ = "product_class"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    description: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_DESCRIPTION_LENGTH))

    __table_args__ = (UniqueConstraint("name_key", name="uq_product_class_name_key"),)


class Mill(StatusMixin, NamedMixin, Base):
    """Paper mill (molino)."""

    __tablename__ = "mill"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    description: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_DESCRIPTION_LENGTH))

    __table_args__ = (UniqueConstraint("name_key", name="uq_mill_name_key"),)


class Grade(StatusMixin, NamedMixin, Base):
    """Paper grade (grado)."""

    __tablename__ = "grade"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    description: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_DESCRIPTION_LENGTH))

    __table_args__ = (UniqueConstraint("name_key", name="uq_grade_name_key"),)


class Supplier(StatusMixin, NamedMixin, Base):
    """
    Coil supplier (proveedor). ``name`` is the trade name.
    """

    __tablename__ = "supplier"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    business_name: Mapped[Optional[str]] = mapped_column(String(200))
    tax_id: Mapped[Optional[str]] = mapped_column(String(20))
    phone: Mapped[Optional[str]] = mapped_column(String(30))
    email: Mapped[Optional[str]] = mapped_column(String(120))
    country: Mapped[Optional[str]] = mapped_column(String(80))
    state: Mapped[Optional[str]] = mapped_column(String(80))
    city: Mapped[Optional[str]] = mapped_column(String(80))

    __table_args__ = (UniqueConstraint("name_key", name="uq_supplier_name_key"),)


class Coil(StatusMixin, Base):
    """
    Paper coil (bobina), identified by the supplier's code.
    Business measures are stored as given; only positivity is validated on input.
    """

    __tablename__ = "coil"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    supplier_code: Mapped[str] = mapped_column(String(Limits.MAX_CODE_LENGTH), nullable=False)
    supplier_code_key: Mapped[str] = mapped_column(
        String(Limits.MAX_CODE_LENGTH), nullable=False, info={"derived": True}
    )
    width: Mapped[float] = mapped_column(Float, nullable=False)
    grammage: Mapped[float] = mapped_column(Float, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    caliber: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_CALIBER_LENGTH))

    type_id: Mapped[int] = mapped_column(IdType, ForeignKey("product_type.id"), nullable=False, index=True)
    class_id: Mapped[int] = mapped_column(IdType, ForeignKey("product_class.id"), nullable=False, index=True)
    mill_id: Mapped[int] = mapped_column(IdType, ForeignKey("mill.id"), nullable=False, index=True)
    grade_id: Mapped[int] = mapped_column(IdType, ForeignKey("grade.id"), nullable=False, index=True)
    supplier_id: Mapped[int] = mapped_column(IdType, ForeignKey("supplier.id"), nullable=False, index=True)

    product_type: Mapped["ProductType"] = relationship()
    product_class: Mapped["ProductClass"] = relationship()
    mill: Mapped["Mill"] = relationship()
    grade: Mapped["Grade"] = relationship()
    supplier: Mapped["Supplier"] = relationship()

    __table_args__ = (UniqueConstraint("supplier_code_key", name="uq_coil_supplier_code_key"),)

    @validates("supplier_code")
    def _sync_code_key(self, key: str, value: str) -> str:
        if value is not None:
            self.supplier_code_key = normalize_key(value)
        return value
