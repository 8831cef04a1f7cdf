from tcgkiosk.api.catalog import router as catalog_router
from tcgkiosk.api.health import router as health_router
from tcgkiosk.api.images import router as images_router

__all__ = [
    "catalog_router",
    "health_router",
    "images_router",
]
