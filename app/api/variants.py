"""Variant API endpoints.

Variants are created in batches and must reference existing parent
products. Name, SKU and URL key must be unique across variants.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from app.api.dependencies import Pagination, Sort, VariantServiceDep, variant_search_criteria
from app.api.schemas import DeleteResponse, ErrorResponse, VariantListResponse
from app.catalog.schemas import VariantCreate, VariantFields, VariantResponse, VariantUpdate
from app.catalog.search import SearchCriteria

router = APIRouter(prefix="/variants", tags=["Variants"])


@router.post(
    "",
    response_model=list[VariantResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create variants",
    description=(
        "Creates a batch of variants. Nothing is written if any name, SKU or "
        "URL key is taken or any parent product is missing."
    ),
)
async def create_variants(
    service: VariantServiceDep,
    items: Annotated[list[VariantCreate], Body(min_length=1)],
) -> list[VariantResponse]:
    """Create a batch of variants."""
    variants = await service.create(items)
    return [VariantResponse.model_validate(v) for v in variants]


@router.get(
    "",
    response_model=list[VariantResponse],
    responses={400: {"model": ErrorResponse}},
    summary="Get variants by ID",
)
async def list_variants_by_id(
    service: VariantServiceDep,
    pagination: Pagination,
    ids: list[UUID] = Query(..., description="Variant IDs"),
) -> list[VariantResponse]:
    """Get one page of the variants with the given IDs."""
    variants = await service.find_by_ids(ids, pagination)
    return [VariantResponse.model_validate(v) for v in variants]


@router.get(
    "/by-sku",
    response_model=list[VariantResponse],
    responses={400: {"model": ErrorResponse}},
    summary="Get variants by SKU",
)
async def list_variants_by_sku(
    service: VariantServiceDep,
    pagination: Pagination,
    skus: list[str] = Query(..., description="Variant SKUs"),
) -> list[VariantResponse]:
    """Get one page of the variants with the given SKUs."""
    variants = await service.find_by_skus(skus, pagination)
    return [VariantResponse.model_validate(v) for v in variants]


@router.get(
    "/search",
    response_model=VariantListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search variants",
)
async def search_variants(
    service: VariantServiceDep,
    pagination: Pagination,
    sort: Sort,
    criteria: Annotated[SearchCriteria, Depends(variant_search_criteria)],
    value: str = Query("", description="Search text"),
) -> VariantListResponse:
    """Search variants by ID text and the flagged columns."""
    result = await service.search(value, pagination, sort, criteria)
    return VariantListResponse(
        variants=[VariantResponse.model_validate(v) for v in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get variant details",
)
async def get_variant(
    variant_id: UUID,
    service: VariantServiceDep,
) -> VariantResponse:
    """Get a variant by ID."""
    variant = await service.get(variant_id)
    return VariantResponse.model_validate(variant)


@router.put(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Replace a variant",
)
async def update_variant(
    variant_id: UUID,
    variant_data: VariantFields,
    service: VariantServiceDep,
) -> VariantResponse:
    """Overwrite every field of a variant."""
    variant = await service.update(variant_id, variant_data)
    return VariantResponse.model_validate(variant)


@router.patch(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update a variant",
)
async def patch_variant(
    variant_id: UUID,
    changes: VariantUpdate,
    service: VariantServiceDep,
) -> VariantResponse:
    """Update the fields present in the request body."""
    variant = await service.patch(variant_id, changes)
    return VariantResponse.model_validate(variant)


@router.delete(
    "",
    response_model=DeleteResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Delete variants",
)
async def delete_variants(
    service: VariantServiceDep,
    ids: list[UUID] = Query(..., description="Variant IDs"),
) -> DeleteResponse:
    """Delete the variants with the given IDs; unknown IDs are skipped."""
    result = await service.delete(ids)
    return DeleteResponse(**result)
