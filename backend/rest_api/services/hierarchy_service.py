"""
Hierarchy Service - lifecycle of child entities that belong to a parent.

Adds the parent/child invariants on top of ``LifecycleService``:
- a child always references an existing parent, which never changes after creation;
- a child's name is unique among its siblings (case-insensitive, active or not);
- the parent's collection and the child's back-reference always agree;
- deleting a parent removes all of its children in the same transaction.
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Base, normalize_key
from rest_api.services.base_service import LifecycleService, is_unique_violation
from rest_api.services.crud.hierarchy import Association, attach_child, detach_child
from rest_api.services.crud.repository import ScopedRepository, store_errors
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    CatalogError,
    DuplicateInScopeError,
    NotFoundError,
    ParentNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

ChildT = TypeVar("ChildT", bound=Base)


class HierarchyService(LifecycleService[ChildT], Generic[ChildT]):
    """
    Lifecycle service for a child entity type.

    ``create`` and ``update`` route through ``create_child`` and
    ``update_child``; activation, reads and soft delete are inherited.

    Args:
        db: Session for this unit of work.
        model: Child model.
        entity_name: Human-readable child name.
        parent_service: Lifecycle service of the parent type.
        parent_key: Child column referencing the parent (protected from updates).
        association: Relationship attribute names on both sides.
        name_field: Child attribute that must be unique among siblings.
    """

    def __init__(
        self,
        db: Session,
        model: type[ChildT],
        entity_name: str,
        *,
        parent_service: LifecycleService,
        parent_key: str,
        association: Association,
        name_field: str = "name",
    ):
        super().__init__(
            db=db,
            model=model,
            entity_name=entity_name,
            search_key=getattr(model, f"{name_field}_key"),
            protected_fields={parent_key},
            repository=ScopedRepository(
                model, db, parent_key=parent_key, relations=(association.back_reference,)
            ),
        )
        self._parent_service = parent_service
        self._parent_key = parent_key
        self._association = association
        self._name_field = name_field

    @property
    def repo(self) -> ScopedRepository[ChildT]:
        return self._repo

    @property
    def parent_service(self) -> LifecycleService:
        return self._parent_service

    # =========================================================================
    # Child lifecycle
    # =========================================================================

    def create(self, data: dict[str, Any]) -> ChildT:
        parent_id = data.get(self._parent_key)
        if parent_id is None:
            raise ValidationError(
                f"El campo '{self._parent_key}' es obligatorio para {self._entity_name}",
                field=self._parent_key,
            )
        return self.create_child(parent_id, data)

    def update(self, entity_id: int, data: dict[str, Any]) -> ChildT:
        return self.update_child(entity_id, data)

    def create_child(self, parent_id: int, data: dict[str, Any]) -> ChildT:
        """
        Create a child under ``parent_id``.

        Raises:
            ParentNotFoundError: If the parent does not exist.
            DuplicateInScopeError: If a sibling already uses the name.
            ValidationError: If a required field is missing.
        """
        parent = self._get_parent(parent_id)
        data = dict(data)
        self._validate_create(data)
        values = self._resolve_values(data, include_protected=False)

        name = values[self._name_field]
        if self.repo.exists_by_name_in_scope(name, parent.id):
            raise DuplicateInScopeError(
                self._entity_name, name, self._parent_service.entity_name, parent.id
            )

        child = self._model(**values)
        with store_errors(self._db, "load_children"):
            attach_child(parent, child, self._association)
        self._persist(child, "create_child", {**values, self._parent_key: parent.id})

        logger.info(
            f"{self._entity_name} created",
            entity_id=child.id,
            parent_id=parent.id,
        )
        self._after_create(child)
        return child

    def update_child(self, child_id: int, data: dict[str, Any]) -> ChildT:
        """
        Full replace of a child's fields. The parent is never changed.

        Raises:
            NotFoundError: If the child does not exist.
            DuplicateInScopeError: If the new name is used by a sibling.
        """
        child = self.get_by_id(child_id)
        data = dict(data)
        current_parent_id = getattr(child, self._parent_key)

        requested_parent = data.pop(self._parent_key, None)
        if requested_parent is not None and requested_parent != current_parent_id:
            logger.warning(
                f"Ignoring {self._parent_key} change on {self._entity_name} update",
                entity_id=child_id,
                current=current_parent_id,
                requested=requested_parent,
            )

        self._validate_update(child, data)
        values = self._resolve_values(data, include_protected=False)

        name = values[self._name_field]
        if normalize_key(name) != normalize_key(getattr(child, self._name_field)):
            if self.repo.exists_by_name_in_scope(name, current_parent_id, exclude_id=child.id):
                raise DuplicateInScopeError(
                    self._entity_name,
                    name,
                    self._parent_service.entity_name,
                    current_parent_id,
                )

        self._apply(child, values)
        self._persist(child, "update_child", {**values, self._parent_key: current_parent_id})

        logger.info(f"{self._entity_name} updated", entity_id=child_id)
        return child

    # =========================================================================
    # Parent-level operations
    # =========================================================================

    def delete_parent(self, parent_id: int) -> int:
        """
        Hard-delete a parent and all its children in one transaction.

        Returns:
            Number of children removed.

        Raises:
            NotFoundError: If the parent does not exist.
        """
        parent = self._parent_service.find(parent_id)
        if parent is None:
            raise NotFoundError(self._parent_service.entity_name, parent_id)

        with store_errors(self._db, "load_children"):
            children = list(getattr(parent, self._association.collection))
        try:
            for child in children:
                detach_child(parent, child, self._association)
                self._repo.delete(child)
            self._parent_service.repo.delete(parent)
            with store_errors(self._db, "delete_parent"):
                safe_commit(self._db)
        except IntegrityError as exc:
            self._db.rollback()
            raise ValidationError(
                f"No se pudo eliminar {self._parent_service.entity_name} con ID {parent_id}",
                cause=str(exc.orig),
            ) from exc

        logger.info(
            f"{self._parent_service.entity_name} purged",
            parent_id=parent_id,
            removed_children=len(children),
        )
        return len(children)

    def list_by_parent(self, parent_id: int) -> Sequence[ChildT]:
        """
        Raises:
            ParentNotFoundError: If the parent does not exist.
        """
        self._get_parent(parent_id)
        return self.repo.find_by_parent(parent_id)

    def count_by_parent(self, parent_id: int) -> int:
        return self.repo.count_by_parent(parent_id)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _get_parent(self, parent_id: int) -> Any:
        parent = self._parent_service.find(parent_id)
        if parent is None:
            raise ParentNotFoundError(
                self._parent_service.entity_name, parent_id, field=self._parent_key
            )
        return parent

    def _integrity_error(self, exc: IntegrityError, values: dict[str, Any]) -> CatalogError:
        # Concurrent insert of the same name under the same parent
        if is_unique_violation(exc):
            return DuplicateInScopeError(
                self._entity_name,
                values.get(self._name_field),
                self._parent_service.entity_name,
                values.get(self._parent_key),
                source="constraint",
            )
        return super()._integrity_error(exc, values)
