"""
Repository Pattern for database access.

Provides a clean abstraction layer between business logic and data access.
Every query goes through ``store_errors`` so that connectivity failures
surface as ``StoreUnavailableError`` and never as empty results.

Usage:
    from rest_api.services.crud.repository import (
        BaseRepository,
        ScopedRepository,
        ActiveSpec,
        NameContainsSpec,
    )

    locality_repo = BaseRepository(Locality, db)
    localities = locality_repo.find_all()
    locality = locality_repo.find_by_id(42)
    taken = locality_repo.exists_by_key(Locality.name_key, "Planta Norte")

    # Parent-scoped repository
    area_repo = ScopedRepository(Area, db, parent_key="locality_id")
    areas = area_repo.find_by_parent(locality_id=5)
    area_repo.exists_by_name_in_scope("Almacen", parent_id=5)

    # Specifications
    area_repo.find_by_spec(ActiveSpec(Area) & NameContainsSpec(Area.name_key, "alm"))
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterable, Iterator, Sequence, TypeVar

from sqlalchemy import and_, exists as sql_exists, func, not_, or_, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from rest_api.models import Base, normalize_key
from shared.utils.exceptions import StoreUnavailableError

ModelT = TypeVar("ModelT", bound=Base)


@contextmanager
def store_errors(session: Session, operation: str) -> Iterator[None]:
    """
    Translate store connectivity failures into ``StoreUnavailableError``.

    Integrity violations are re-raised untouched: callers map them to the
    matching duplicate error. Everything else raised by the DBAPI
    (OperationalError, InterfaceError, ...) rolls back the session first.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DBAPIError as exc:
        session.rollback()
        raise StoreUnavailableError(operation, cause=type(exc).__name__) from exc


class BaseRepository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Reads return inactive rows too unless ``include_inactive=False`` is
    passed: activity is a state the caller filters on, not a visibility rule.

    ``relations`` names relationship attributes that callers serialize. They
    are loaded together with every read, so a lost connection surfaces here
    as ``StoreUnavailableError`` instead of during a later lazy load.
    """

    def __init__(
        self,
        model: type[ModelT],
        session: Session,
        *,
        relations: Sequence[str] = (),
    ):
        self._model = model
        self._session = session
        self._relations = tuple(relations)

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_active_filter(self, query: Select, include_inactive: bool) -> Select:
        if not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        return query

    def _apply_window(
        self,
        query: Select,
        *,
        limit: int | None,
        offset: int | None,
        order_by: Any | None,
    ) -> Select:
        """Apply ordering (store order by default) and paging."""
        query = query.order_by(order_by if order_by is not None else self._model.id)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    def _apply_options(self, query: Select, options: list[Any] | None) -> Select:
        """Apply eager loading options, plus loaders for the configured relations."""
        loaders = [selectinload(getattr(self._model, name)) for name in self._relations]
        if options:
            loaders.extend(options)
        if loaders:
            query = query.options(*loaders)
        return query

    def _touch_relations(self, entities: Iterable[ModelT], names: Sequence[str]) -> None:
        # Entities already in the identity map may hold expired relations
        # that the eager loaders above skip
        for entity in entities:
            for name in names:
                getattr(entity, name)

    def load_relations(self, entity: ModelT, *names: str) -> ModelT:
        """
        Load relationship attributes of ``entity`` (the configured relations
        by default) under ``store_errors``.
        """
        with store_errors(self._session, "load_relations"):
            self._touch_relations([entity], names or self._relations)
        return entity

    def find_by_id(
        self,
        entity_id: int,
        *,
        options: list[Any] | None = None,
        include_inactive: bool = True,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_active_filter(query, include_inactive)
        query = self._apply_options(query, options)
        with store_errors(self._session, "find_by_id"):
            entity = self._session.scalar(query)
            if entity is not None:
                self._touch_relations([entity], self._relations)
            return entity

    def find_all(
        self,
        *,
        options: list[Any] | None = None,
        include_inactive: bool = True,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities.

        Args:
            options: SQLAlchemy loader options.
            include_inactive: Include deactivated entities.
            limit: Maximum number of results.
            offset: Number of results to skip.
            order_by: Column or expression to order by (defaults to id).
        """
        query = self._apply_active_filter(self._base_query(), include_inactive)
        query = self._apply_options(query, options)
        query = self._apply_window(query, limit=limit, offset=offset, order_by=order_by)
        with store_errors(self._session, "find_all"):
            entities = self._session.scalars(query).all()
            self._touch_relations(entities, self._relations)
            return entities

    def find_by_spec(
        self,
        spec: "Specification",
        *,
        options: list[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """Find entities matching a specification."""
        query = self._base_query().where(spec.to_expression())
        query = self._apply_options(query, options)
        query = self._apply_window(query, limit=limit, offset=offset, order_by=order_by)
        with store_errors(self._session, "find_by_spec"):
            entities = self._session.scalars(query).all()
            self._touch_relations(entities, self._relations)
            return entities

    def count(self, *, include_inactive: bool = True) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self._model)
        if not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        with store_errors(self._session, "count"):
            return self._session.scalar(query) or 0

    def count_by_spec(self, spec: "Specification") -> int:
        query = select(func.count()).select_from(self._model).where(spec.to_expression())
        with store_errors(self._session, "count_by_spec"):
            return self._session.scalar(query) or 0

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists by ID."""
        query = select(sql_exists().where(self._model.id == entity_id))
        with store_errors(self._session, "exists"):
            return self._session.scalar(query) or False

    def exists_by_key(
        self,
        key_column: Any,
        value: str,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Case-insensitive uniqueness check against a normalized key column.

        Args:
            key_column: The derived key column (e.g. ``Locality.name_key``).
            value: Raw value; normalized before comparing.
            exclude_id: Ignore this row (the entity being updated).
        """
        conditions = [key_column == normalize_key(value)]
        if exclude_id is not None:
            conditions.append(self._model.id != exclude_id)
        query = select(sql_exists().where(*conditions))
        with store_errors(self._session, "exists_by_key"):
            return self._session.scalar(query) or False

    def save(self, entity: ModelT) -> ModelT:
        """
        Insert or update ``entity`` and flush (not committed).

        The returned entity carries the store-generated id.
        """
        with store_errors(self._session, "save"):
            self._session.add(entity)
            self._session.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard-delete entity and flush (not committed)."""
        with store_errors(self._session, "delete"):
            self._session.delete(entity)
            self._session.flush()

    def refresh(self, entity: ModelT) -> ModelT:
        """Refresh entity from database."""
        with store_errors(self._session, "refresh"):
            self._session.refresh(entity)
        return entity


class ScopedRepository(BaseRepository[ModelT]):
    """
    Repository for entities that live inside a parent.

    ``parent_key`` names the foreign-key column pointing at the parent.

    Usage:
        repo = ScopedRepository(Area, db, parent_key="locality_id")
        areas = repo.find_by_parent(5)
    """

    def __init__(
        self,
        model: type[ModelT],
        session: Session,
        *,
        parent_key: str,
        relations: Sequence[str] = (),
    ):
        super().__init__(model, session, relations=relations)
        if not hasattr(model, parent_key):
            raise AttributeError(
                f"Model {model.__name__} does not have {parent_key} column. "
                "Use BaseRepository instead."
            )
        self._parent_key = parent_key

    @property
    def parent_column(self) -> Any:
        return getattr(self._model, self._parent_key)

    def find_by_parent(
        self,
        parent_id: int,
        *,
        options: list[Any] | None = None,
        include_inactive: bool = True,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """Find all entities under one parent."""
        query = self._base_query().where(self.parent_column == parent_id)
        query = self._apply_active_filter(query, include_inactive)
        query = self._apply_options(query, options)
        query = self._apply_window(query, limit=limit, offset=offset, order_by=order_by)
        with store_errors(self._session, "find_by_parent"):
            entities = self._session.scalars(query).all()
            self._touch_relations(entities, self._relations)
            return entities

    def count_by_parent(self, parent_id: int, *, include_inactive: bool = True) -> int:
        """Count entities under one parent."""
        query = (
            select(func.count())
            .select_from(self._model)
            .where(self.parent_column == parent_id)
        )
        if not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        with store_errors(self._session, "count_by_parent"):
            return self._session.scalar(query) or 0

    def exists_by_name_in_scope(
        self,
        name: str,
        parent_id: int,
        exclude_id: int | None = None,
    ) -> bool:
        """
        True when another entity under ``parent_id`` already uses ``name``
        (case-insensitive), active or not.
        """
        conditions = [
            self.parent_column == parent_id,
            self._model.name_key == normalize_key(name),
        ]
        if exclude_id is not None:
            conditions.append(self._model.id != exclude_id)
        query = select(sql_exists().where(*conditions))
        with store_errors(self._session, "exists_by_name_in_scope"):
            return self._session.scalar(query) or False


# =============================================================================
# Specifications
# =============================================================================


class Specification:
    """
    Base class for query specifications.

    Specifications encapsulate query conditions that can be
    combined using logical operators (&, |, ~).
    """

    def to_expression(self) -> Any:
        """
        Convert specification to SQLAlchemy expression.

        Must be implemented by subclasses.
        """
        raise NotImplementedError

    def __and__(self, other: "Specification") -> "AndSpecification":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification") -> "OrSpecification":
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification":
        return NotSpecification(self)


class AndSpecification(Specification):
    """AND combination of two specifications."""

    def __init__(self, left: Specification, right: Specification):
        self._left = left
        self._right = right

    def to_expression(self) -> Any:
        return and_(self._left.to_expression(), self._right.to_expression())


class OrSpecification(Specification):
    """OR combination of two specifications."""

    def __init__(self, left: Specification, right: Specification):
        self._left = left
        self._right = right

    def to_expression(self) -> Any:
        return or_(self._left.to_expression(), self._right.to_expression())


class NotSpecification(Specification):
    """Negation of a specification."""

    def __init__(self, spec: Specification):
        self._spec = spec

    def to_expression(self) -> Any:
        return not_(self._spec.to_expression())


class ActiveSpec(Specification):
    def __init__(self, model: type[Base]):
        self.model = model

    def to_expression(self) -> Any:
        return self.model.is_active.is_(True)


class EqualsSpec(Specification):
    def __init__(self, column: Any, value: Any):
        self.column = column
        self.value = value

    def to_expression(self) -> Any:
        return self.column == self.value


class NameContainsSpec(Specification):
    """
    Case-insensitive "contains" on a normalized key column.
    LIKE wildcards in the search text are matched literally.
    """

    def __init__(self, key_column: Any, text: str):
        self.key_column = key_column
        self.text = normalize_key(text)

    def to_expression(self) -> Any:
        return self.key_column.contains(self.text, autoescape=True)


class RangeSpec(Specification):
    """Inclusive range; either bound may be omitted."""

    def __init__(self, column: Any, minimum: float | None = None, maximum: float | None = None):
        self.column = column
        self.minimum = minimum
        self.maximum = maximum

    def to_expression(self) -> Any:
        conditions = []
        if self.minimum is not None:
            conditions.append(self.column >= self.minimum)
        if self.maximum is not None:
            conditions.append(self.column <= self.maximum)
        return and_(*conditions) if conditions else self.column.is_not(None)
