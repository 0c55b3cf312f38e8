"""
Product routers: catalogs (type, class, mill, grade, supplier) and coils.
"""

from .catalogs import routers as catalog_routers
from .coils import router as coils_router

__all__ = ["catalog_routers", "coils_router"]
