"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from rest_api.core.cors import configure_cors
from rest_api.core.exception_handlers import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.inventory import areas_router, localities_router
from rest_api.routers.products import catalog_routers, coils_router
from rest_api.routers.public import health_router
from shared.config.settings import settings


API_PREFIX = "/api"


# Create FastAPI application
app = FastAPI(
    title="Catalogos REST API",
    description="Locality, area and product catalog management API",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app)
register_middlewares(app)
register_exception_handlers(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(localities_router, prefix=API_PREFIX)
app.include_router(areas_router, prefix=API_PREFIX)
for catalog_router in catalog_routers:
    app.include_router(catalog_router, prefix=API_PREFIX)
app.include_router(coils_router, prefix=API_PREFIX)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
