"""
Base class and shared mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, validates

from shared.config.constants import Limits


# BIGINT in PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_key(value: str) -> str:
    """Case-insensitive comparison key for a name or code."""
    return value.strip().casefold()


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


@runtime_checkable
class StatusCapable(Protocol):
    """
    Contract every entity managed by the lifecycle engine satisfies:
    a store-generated ``id`` and an activity flag that can be toggled.
    """

    id: int
    is_active: bool

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


def is_status_capable(model: type) -> bool:
    """
    Check a mapped class (not an instance) against ``StatusCapable``.

    Protocols with data members cannot be used with ``issubclass``, so the
    mapper is inspected for the ``id`` and ``is_active`` columns instead.
    """
    try:
        mapper = inspect(model)
    except NoInspectionAvailable:
        return False
    columns = mapper.columns
    if "id" not in columns or "is_active" not in columns:
        return False
    return callable(getattr(model, "activate", None)) and callable(
        getattr(model, "deactivate", None)
    )


class StatusMixin:
    """
    Mixin providing the activity flag and audit timestamps.

    Fields added:
    - is_active: Activity flag (True = active, False = inactive/soft-deleted)
    - created_at, updated_at: Audit timestamps

    Methods:
    - activate(): mark the entity active
    - deactivate(): mark the entity inactive
    """

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False, info={"audit": True}
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=_utcnow, nullable=True, info={"audit": True}
    )

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        active = "active" if self.is_active else "inactive"
        return f"<{class_name}(id={id_val}, {active})>"


class NamedMixin:
    """
    Mixin for entities identified by a human-readable name.

    ``name_key`` holds the normalized name and is what uniqueness
    constraints and lookups compare against. It is derived, never written
    directly.
    """

    name: Mapped[str] = mapped_column(String(Limits.MAX_STORED_NAME_LENGTH), nullable=False)
    name_key: Mapped[str] = mapped_column(
        String(Limits.MAX_STORED_NAME_LENGTH), nullable=False, index=True, info={"derived": True}
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        if value is not None:
            self.name_key = normalize_key(value)
        return value
