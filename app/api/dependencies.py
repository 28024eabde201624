"""Shared FastAPI dependencies for the catalog routers."""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.search import PaginationParams, SearchCriteria, SortOrder, SortParams
from app.catalog.service import ProductCatalogService
from app.catalog.variant_service import VariantCatalogService
from app.infrastructure.config import settings
from app.infrastructure.database import get_session

DbSession = Annotated[AsyncSession, Depends(get_session)]


def get_product_service(session: DbSession) -> ProductCatalogService:
    """Get product service bound to the request's session."""
    return ProductCatalogService(session)


def get_variant_service(session: DbSession) -> VariantCatalogService:
    """Get variant service bound to the request's session."""
    return VariantCatalogService(session)


def pagination_params(
    page: int = Query(1, description="Page number (1-based)"),
    limit: int = Query(
        settings.default_page_limit,
        le=settings.max_page_limit,
        description="Items per page",
    ),
) -> PaginationParams:
    """Read page and limit from the query string.

    Lower bounds are enforced by the services.
    """
    return PaginationParams(page=page, limit=limit)


def sort_params(
    sort_field: str | None = Query(None, alias="sortField", description="Column to sort by"),
    sort_order: SortOrder = Query(SortOrder.ASC, alias="sortOrder"),
) -> SortParams:
    """Read the optional single-field sort from the query string."""
    return SortParams(sort_field=sort_field, sort_order=sort_order)


def product_search_criteria(
    name: bool = False,
    sku: bool = False,
    description: bool = False,
    url_key: bool = Query(False, alias="urlKey"),
    meta_title: bool = Query(False, alias="metaTitle"),
    meta_description: bool = Query(False, alias="metaDescription"),
    created_by_user_id: bool = Query(False, alias="createdByUserId"),
    is_active: bool = Query(False, alias="isActive"),
    in_stock: bool = Query(False, alias="inStock"),
    is_visible: bool = Query(False, alias="isVisible"),
    type: bool = False,
    new_from_date: bool = Query(False, alias="newFromDate"),
    new_to_date: bool = Query(False, alias="newToDate"),
) -> SearchCriteria:
    """Read the product search flags from the query string."""
    return SearchCriteria(
        name=name,
        sku=sku,
        description=description,
        url_key=url_key,
        meta_title=meta_title,
        meta_description=meta_description,
        created_by_user_id=created_by_user_id,
        is_active=is_active,
        in_stock=in_stock,
        is_visible=is_visible,
        type=type,
        new_from_date=new_from_date,
        new_to_date=new_to_date,
    )


def variant_search_criteria(
    name: bool = False,
    sku: bool = False,
    description: bool = False,
    url_key: bool = Query(False, alias="urlKey"),
    meta_title: bool = Query(False, alias="metaTitle"),
    meta_description: bool = Query(False, alias="metaDescription"),
    is_active: bool = Query(False, alias="isActive"),
    in_stock: bool = Query(False, alias="inStock"),
    is_visible: bool = Query(False, alias="isVisible"),
) -> SearchCriteria:
    """Read the variant search flags from the query string."""
    return SearchCriteria(
        name=name,
        sku=sku,
        description=description,
        url_key=url_key,
        meta_title=meta_title,
        meta_description=meta_description,
        is_active=is_active,
        in_stock=in_stock,
        is_visible=is_visible,
    )


ProductServiceDep = Annotated[ProductCatalogService, Depends(get_product_service)]
VariantServiceDep = Annotated[VariantCatalogService, Depends(get_variant_service)]
Pagination = Annotated[PaginationParams, Depends(pagination_params)]
Sort = Annotated[SortParams, Depends(sort_params)]
