"""
Centralized domain exceptions for consistent error handling.

Services raise these; only the FastAPI exception handlers in
``rest_api.core.exception_handlers`` turn them into HTTP responses.

Usage:
    from shared.utils.exceptions import NotFoundError, DuplicateInScopeError

    raise NotFoundError("Localidad", locality_id)
    raise DuplicateInScopeError("Área", "Almacen", "Localidad", 1)
"""

from typing import Any

from shared.config.constants import ErrorKinds
from shared.config.logging import get_logger

logger = get_logger(__name__)


class CatalogError(Exception):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class so every failure is
    logged once, with its structured context, where it is raised.
    """

    kind: str = "error"

    def __init__(self, detail: str, log_level: str = "warning", **log_context: Any):
        self.detail = detail
        self.context = log_context
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, error=self.kind, **log_context)
        super().__init__(detail)


# =============================================================================
# Missing entities
# =============================================================================


class NotFoundError(CatalogError):
    """
    Entity not found.

    Usage:
        raise NotFoundError("Área", 123)
    """

    kind = ErrorKinds.NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} con ID {entity_id} no encontrado"
        else:
            detail = f"{entity} no encontrado"
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class ParentNotFoundError(CatalogError):
    """
    A referenced parent (or catalog reference) does not exist.

    ``field`` names the attribute that carried the dangling reference.
    """

    kind = ErrorKinds.PARENT_NOT_FOUND

    def __init__(
        self,
        entity: str,
        entity_id: int | str | None = None,
        field: str | None = None,
        **log_context: Any,
    ):
        if field:
            detail = f"{entity} con ID {entity_id} no encontrado (campo '{field}')"
        else:
            detail = f"{entity} con ID {entity_id} no encontrado"
        self.entity = entity
        self.entity_id = entity_id
        self.field = field
        super().__init__(detail, entity=entity, entity_id=entity_id, field=field, **log_context)


# =============================================================================
# Uniqueness violations
# =============================================================================


class DuplicateEntityError(CatalogError):
    """Entity with the same unique value already exists."""

    kind = ErrorKinds.DUPLICATE

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} con identificador '{identifier}' ya existe"
        else:
            detail = f"{entity} ya existe"
        self.entity = entity
        self.identifier = identifier
        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


class DuplicateInScopeError(DuplicateEntityError):
    """
    A child with the same (case-insensitive) name already exists under the
    same parent.
    """

    kind = ErrorKinds.DUPLICATE_IN_SCOPE

    def __init__(
        self,
        entity: str,
        name: str,
        parent_entity: str,
        parent_id: int | None = None,
        **log_context: Any,
    ):
        self.entity = entity
        self.identifier = name
        self.parent_entity = parent_entity
        self.parent_id = parent_id
        if parent_id is not None:
            detail = f"Ya existe {entity} con el nombre '{name}' en {parent_entity} con ID {parent_id}"
        else:
            detail = f"Nombres de {entity} duplicados: '{name}'"
        CatalogError.__init__(
            self,
            detail,
            entity=entity,
            identifier=name,
            parent_entity=parent_entity,
            parent_id=parent_id,
            **log_context,
        )


# =============================================================================
# Bad input / infrastructure
# =============================================================================


class ValidationError(CatalogError):
    """
    Input validation error.

    Usage:
        raise ValidationError("El campo 'name' es obligatorio", field="name")
    """

    kind = ErrorKinds.VALIDATION_FAILED

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, **log_context)


class StoreUnavailableError(CatalogError):
    """The database could not be reached or failed for a non-integrity reason."""

    kind = ErrorKinds.STORE_UNAVAILABLE

    def __init__(self, operation: str | None = None, **log_context: Any):
        if operation:
            detail = f"Base de datos no disponible durante '{operation}'"
        else:
            detail = "Base de datos no disponible"
        self.operation = operation
        super().__init__(detail, log_level="error", operation=operation, **log_context)
