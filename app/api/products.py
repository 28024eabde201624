"""Product API endpoints.

Provides endpoints for creating, listing, searching, updating and
deleting products. Name, SKU and URL key must be unique across products.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import Pagination, ProductServiceDep, Sort, product_search_criteria
from app.api.schemas import DeleteResponse, ErrorResponse, ProductListResponse
from app.catalog.schemas import ProductCreate, ProductResponse, ProductUpdate
from app.catalog.search import SearchCriteria

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a new product",
    description="Creates a new product. Name, SKU and URL key must be unique.",
)
async def create_product(
    product_data: ProductCreate,
    service: ProductServiceDep,
) -> ProductResponse:
    """Create a product.

    Args:
        product_data: Product creation data.
        service: Product service.

    Returns:
        The stored product.
    """
    product = await service.create(product_data)
    return ProductResponse.model_validate(product)


@router.get(
    "",
    response_model=list[ProductResponse],
    responses={400: {"model": ErrorResponse}},
    summary="Get products by ID",
)
async def list_products_by_id(
    service: ProductServiceDep,
    pagination: Pagination,
    ids: list[UUID] = Query(..., description="Product IDs"),
) -> list[ProductResponse]:
    """Get one page of the products with the given IDs."""
    products = await service.find_by_ids(ids, pagination)
    return [ProductResponse.model_validate(p) for p in products]


@router.get(
    "/by-sku",
    response_model=list[ProductResponse],
    responses={400: {"model": ErrorResponse}},
    summary="Get products by SKU",
)
async def list_products_by_sku(
    service: ProductServiceDep,
    pagination: Pagination,
    skus: list[str] = Query(..., description="Product SKUs"),
) -> list[ProductResponse]:
    """Get one page of the products with the given SKUs."""
    products = await service.find_by_skus(skus, pagination)
    return [ProductResponse.model_validate(p) for p in products]


@router.get(
    "/search",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search products",
    description=(
        "Matches products whose ID contains the value, plus products matching "
        "the value on every column whose flag is set."
    ),
)
async def search_products(
    service: ProductServiceDep,
    pagination: Pagination,
    sort: Sort,
    criteria: Annotated[SearchCriteria, Depends(product_search_criteria)],
    value: str = Query("", description="Search text"),
) -> ProductListResponse:
    """Search products.

    Args:
        service: Product service.
        pagination: Page and limit.
        sort: Optional sort field and order.
        criteria: Columns to search.
        value: Search text.

    Returns:
        Paginated products.
    """
    result = await service.search(value, pagination, sort, criteria)
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(
    product_id: UUID,
    service: ProductServiceDep,
) -> ProductResponse:
    """Get a product by ID."""
    product = await service.get(product_id)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Replace a product",
)
async def update_product(
    product_id: UUID,
    product_data: ProductCreate,
    service: ProductServiceDep,
) -> ProductResponse:
    """Overwrite every field of a product."""
    product = await service.update(product_id, product_data)
    return ProductResponse.model_validate(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update a product",
)
async def patch_product(
    product_id: UUID,
    changes: ProductUpdate,
    service: ProductServiceDep,
) -> ProductResponse:
    """Update the fields present in the request body."""
    product = await service.patch(product_id, changes)
    return ProductResponse.model_validate(product)


@router.delete(
    "",
    response_model=DeleteResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Delete products",
)
async def delete_products(
    service: ProductServiceDep,
    ids: list[UUID] = Query(..., description="Product IDs"),
) -> DeleteResponse:
    """Delete the products with the given IDs; unknown IDs are skipped."""
    result = await service.delete(ids)
    return DeleteResponse(**result)
