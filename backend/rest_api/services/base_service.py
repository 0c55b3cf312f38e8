"""
Base Service Classes for the entity lifecycle.

Provides one generic service that gives every status-capable entity the same
create / read / update / activate / deactivate / soft-delete semantics.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import LifecycleService

    class MillService(LifecycleService[Mill]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Mill,
                entity_name="Molino",
                unique_field="name",
                unique_key=Mill.name_key,
            )

Services return ORM entities; routers turn them into output schemas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Base, is_status_capable, normalize_key
from rest_api.services.crud.repository import (
    ActiveSpec,
    BaseRepository,
    NameContainsSpec,
    store_errors,
)
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    CatalogError,
    DuplicateEntityError,
    NotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_MISSING = object()


@dataclass(frozen=True)
class ReplaceableField:
    """A column that a full-replace update overwrites."""

    name: str
    required: bool
    has_default: bool
    default: Any = None


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from a UNIQUE constraint."""
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


class LifecycleService(Generic[ModelT]):
    """
    Generic lifecycle engine for one entity type.

    The model is checked against the ``StatusCapable`` contract once, here,
    so no operation needs a per-call capability lookup.

    Args:
        db: Session for this unit of work.
        model: Mapped class managed by the service.
        entity_name: Human-readable name used in errors and logs.
        unique_field: Attribute that must be globally unique (case-insensitive).
        unique_key: Normalized key column backing ``unique_field``.
        search_key: Key column used by ``search_by_name`` (defaults to ``unique_key``).
        protected_fields: Columns a full-replace update never touches.
        repository: Repository to use instead of a plain ``BaseRepository``.

    Raises:
        TypeError: If ``model`` does not satisfy ``StatusCapable``.
    """

    def __init__(
        self,
        db: Session,
        model: type[ModelT],
        entity_name: str,
        *,
        unique_field: str | None = None,
        unique_key: Any | None = None,
        search_key: Any | None = None,
        protected_fields: Iterable[str] = (),
        repository: BaseRepository[ModelT] | None = None,
    ):
        if not is_status_capable(model):
            raise TypeError(
                f"{getattr(model, '__name__', model)!r} is not status-capable: "
                "it needs mapped 'id' and 'is_active' columns and activate()/deactivate()"
            )
        if (unique_field is None) != (unique_key is None):
            raise TypeError("unique_field and unique_key must be configured together")

        self._db = db
        self._model = model
        self._entity_name = entity_name
        self._unique_field = unique_field
        self._unique_key = unique_key
        self._search_key = search_key if search_key is not None else unique_key
        self._protected_fields = frozenset(protected_fields)
        self._repo = repository if repository is not None else BaseRepository(model, db)
        self._fields = self._resolve_replaceable_fields()

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @property
    def model(self) -> type[ModelT]:
        return self._model

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    @property
    def replaceable_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields if f.name not in self._protected_fields)

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_all(self) -> Sequence[ModelT]:
        """Every stored instance, active or not, in store order."""
        entities = self._repo.find_all()
        logger.debug(f"Listed {self._entity_name}", count=len(entities))
        return entities

    def list_active(self) -> Sequence[ModelT]:
        return self._repo.find_by_spec(ActiveSpec(self._model))

    def list_paginated(
        self,
        limit: int,
        offset: int,
        order_by: str | None = None,
    ) -> Sequence[ModelT]:
        """
        One page of entities.

        Raises:
            ValidationError: If ``order_by`` is not a sortable field.
        """
        column = None
        if order_by is not None:
            if order_by != "id" and order_by not in {f.name for f in self._fields}:
                raise ValidationError(
                    f"No se puede ordenar {self._entity_name} por '{order_by}'",
                    field="order_by",
                )
            column = getattr(self._model, order_by)
        return self._repo.find_all(limit=limit, offset=offset, order_by=column)

    def count(self) -> int:
        return self._repo.count()

    def find(self, entity_id: int) -> ModelT | None:
        """Entity or None (for callers that map absence to their own error)."""
        return self._repo.find_by_id(entity_id)

    def get_by_id(self, entity_id: int) -> ModelT:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def search_by_name(self, text: str) -> Sequence[ModelT]:
        """Case-insensitive "contains" search on the identifying field."""
        if self._search_key is None:
            raise ValidationError(f"{self._entity_name} no admite búsqueda por nombre")
        return self._repo.find_by_spec(NameContainsSpec(self._search_key, text))

    def exists_by_unique(self, value: str) -> bool:
        if self._unique_key is None:
            raise ValidationError(f"{self._entity_name} no tiene un campo único")
        return self._repo.exists_by_key(self._unique_key, value)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any]) -> ModelT:
        """
        Create new entity. The store assigns the id.

        Raises:
            ValidationError: If a required field is missing.
            DuplicateEntityError: If the unique field is taken.
        """
        data = dict(data)
        self._validate_create(data)
        values = self._resolve_values(data, include_protected=True)
        self._check_unique(values)

        entity = self._model(**values)
        self._before_create(entity, data)
        self._persist(entity, "create", values)

        logger.info(f"{self._entity_name} created", entity_id=entity.id)
        self._after_create(entity)
        return entity

    def update(self, entity_id: int, data: dict[str, Any]) -> ModelT:
        """
        Full replace of every replaceable field. Identity comes from
        ``entity_id``; any ``id`` in ``data`` is ignored.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If a required field is missing.
            DuplicateEntityError: If the new unique value is taken.
        """
        entity = self.get_by_id(entity_id)
        data = dict(data)
        self._validate_update(entity, data)
        values = self._resolve_values(data, include_protected=False)
        self._check_unique(values, current=entity)

        self._apply(entity, values)
        self._persist(entity, "update", values)

        logger.info(f"{self._entity_name} updated", entity_id=entity.id)
        return entity

    def activate(self, entity_id: int) -> ModelT:
        """Idempotent."""
        entity = self.get_by_id(entity_id)
        entity.activate()
        self._persist(entity, "activate", {})
        logger.info(f"{self._entity_name} activated", entity_id=entity_id)
        return entity

    def deactivate(self, entity_id: int) -> ModelT:
        """Idempotent. Never cascades to children."""
        entity = self.get_by_id(entity_id)
        entity.deactivate()
        self._persist(entity, "deactivate", {})
        logger.info(f"{self._entity_name} deactivated", entity_id=entity_id)
        return entity

    def soft_delete(self, entity_id: int) -> None:
        """User-facing delete: the entity is deactivated, never removed."""
        self.deactivate(entity_id)

    # =========================================================================
    # Validation / Lifecycle Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Validate data before create. May mutate ``data``."""
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Validate data before update. May mutate ``data``."""
        pass

    def _before_create(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Hook called after building the entity, before it is persisted."""
        pass

    def _after_create(self, entity: ModelT) -> None:
        """Hook called after entity creation."""
        pass

    def _integrity_error(self, exc: IntegrityError, values: dict[str, Any]) -> CatalogError:
        """Map a storage integrity violation to a domain error."""
        if self._unique_field is not None and is_unique_violation(exc):
            return DuplicateEntityError(
                self._entity_name,
                values.get(self._unique_field),
                source="constraint",
            )
        return ValidationError(
            f"Datos de {self._entity_name} inconsistentes con la base de datos",
            cause=str(exc.orig),
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _resolve_replaceable_fields(self) -> tuple[ReplaceableField, ...]:
        """
        Replaceable = mapped columns minus the primary key, audit timestamps
        and derived key columns.
        """
        fields = []
        for prop in inspect(self._model).column_attrs:
            column = prop.columns[0]
            if column.primary_key or column.info.get("audit") or column.info.get("derived"):
                continue
            default = column.default
            has_default = default is not None and default.is_scalar
            fields.append(
                ReplaceableField(
                    name=prop.key,
                    required=not column.nullable and not has_default,
                    has_default=has_default,
                    default=default.arg if has_default else None,
                )
            )
        return tuple(fields)

    def _resolve_values(self, data: dict[str, Any], *, include_protected: bool) -> dict[str, Any]:
        """
        Full set of column values for a create or full-replace update.

        A missing required field fails, a missing nullable field becomes
        None and a missing field with a column default gets that default.
        """
        values: dict[str, Any] = {}
        for field in self._fields:
            if field.name in self._protected_fields and not include_protected:
                continue
            value = data.get(field.name, _MISSING)
            if value is _MISSING or value is None:
                if field.has_default:
                    value = field.default
                elif field.required:
                    raise ValidationError(
                        f"El campo '{field.name}' es obligatorio para {self._entity_name}",
                        field=field.name,
                    )
                else:
                    value = None
            values[field.name] = value
        return values

    def _apply(self, entity: ModelT, values: dict[str, Any]) -> None:
        for name, value in values.items():
            setattr(entity, name, value)

    def _check_unique(self, values: dict[str, Any], current: ModelT | None = None) -> None:
        if self._unique_field is None:
            return
        value = values.get(self._unique_field)
        if value is None:
            return
        exclude_id = None
        if current is not None:
            if normalize_key(value) == normalize_key(getattr(current, self._unique_field)):
                return
            exclude_id = current.id
        if self._repo.exists_by_key(self._unique_key, value, exclude_id=exclude_id):
            raise DuplicateEntityError(self._entity_name, value)

    def _persist(self, entity: ModelT, operation: str, values: dict[str, Any]) -> ModelT:
        """
        Save, flush and commit; rolls back and raises a domain error on failure.
        The returned entity has its repository relations loaded.
        """
        try:
            self._repo.save(entity)
            with store_errors(self._db, operation):
                safe_commit(self._db)
        except IntegrityError as exc:
            self._db.rollback()
            raise self._integrity_error(exc, values) from exc
        return self._repo.load_relations(entity)
