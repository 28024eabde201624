"""Product Catalog.

Products, their variants, and the services that create, search, update
and delete them.
"""

from app.catalog.models import Product, ProductType, Variant
from app.catalog.repository import CatalogRepository
from app.catalog.search import (
    PaginatedResult,
    PaginationParams,
    SearchCriteria,
    SortOrder,
    SortParams,
)
from app.catalog.service import ProductCatalogService
from app.catalog.variant_service import VariantCatalogService

__all__ = [
    # Models
    "Product",
    "ProductType",
    "Variant",
    # Repository
    "CatalogRepository",
    # Search
    "PaginatedResult",
    "PaginationParams",
    "SearchCriteria",
    "SortOrder",
    "SortParams",
    # Services
    "ProductCatalogService",
    "VariantCatalogService",
]
