"""
Inventory routers: localities and their areas.
"""

from .localities import router as localities_router
from .areas import router as areas_router

__all__ = ["localities_router", "areas_router"]
