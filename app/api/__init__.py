"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from app.api.health import router as health_router
from app.api.products import router as products_router
from app.api.variants import router as variants_router

__all__ = [
    "health_router",
    "products_router",
    "variants_router",
]
