"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, StatusCapable contract, StatusMixin, NamedMixin
- inventory: Locality, Area
- catalog: ProductType, ProductClass, Mill, Grade, Supplier, Coil
"""

# Base classes
from .base import (
    Base,
    StatusCapable,
    StatusMixin,
    NamedMixin,
    is_status_capable,
    normalize_key,
)

# Inventory locations
from .inventory import Locality, Area

# Product catalogs
from .catalog import ProductType, ProductClass, Mill, Grade, Supplier, Coil

__all__ = [
    # Base
    "Base",
    "StatusCapable",
    "StatusMixin",
    "NamedMixin",
    "is_status_capable",
    "normalize_key",
    # Inventory
    "Locality",
    "Area",
    # Catalog
    "ProductType",
    "ProductClass",
    "Mill",
    "Grade",
    "Supplier",
    "Coil",
]
