"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Limits, EntityNames

    if len(name) > Limits.MAX_NAME_LENGTH:
        ...
"""

from typing import Final


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MIN_NAME_LENGTH: Final[int] = 2
    MAX_NAME_LENGTH: Final[int] = 100
    MAX_STORED_NAME_LENGTH: Final[int] = 500
    MAX_DESCRIPTION_LENGTH: Final[int] = 500
    MAX_CODE_LENGTH: Final[int] = 100
    MAX_CALIBER_LENGTH: Final[int] = 50
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination
    DEFAULT_OFFSET: Final[int] = 0


# =============================================================================
# Human-readable entity names (used in error messages)
# =============================================================================


class EntityNames:
    """Spanish display names for every managed entity."""

    LOCALITY: Final[str] = "Localidad"
    AREA: Final[str] = "Área"
    PRODUCT_TYPE: Final[str] = "Tipo"
    PRODUCT_CLASS: Final[str] = "Clase"
    MILL: Final[str] = "Molino"
    GRADE: Final[str] = "Grado"
    SUPPLIER: Final[str] = "Proveedor"
    COIL: Final[str] = "Bobina"


# =============================================================================
# Error kinds (stable identifiers exposed in API error bodies)
# =============================================================================


class ErrorKinds:
    """Error kind identifiers."""

    NOT_FOUND: Final[str] = "not_found"
    PARENT_NOT_FOUND: Final[str] = "parent_not_found"
    DUPLICATE: Final[str] = "duplicate"
    DUPLICATE_IN_SCOPE: Final[str] = "duplicate_in_scope"
    VALIDATION_FAILED: Final[str] = "validation_failed"
    STORE_UNAVAILABLE: Final[str] = "store_unavailable"
