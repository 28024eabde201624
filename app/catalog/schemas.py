"""Catalog schemas for request/response validation.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.catalog.models import ProductType

_CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ListingFields(BaseModel):
    """Descriptive fields shared by products and variants."""

    model_config = _CAMEL_CONFIG

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    sku: str = Field(..., min_length=1, max_length=100, description="Stock Keeping Unit")
    description: str = Field(..., min_length=1, max_length=255)
    url_key: str = Field(..., min_length=1, max_length=255, description="Storefront URL slug")
    meta_title: str = Field(..., min_length=1, max_length=255)
    meta_description: str = Field(..., min_length=1, max_length=255)
    is_active: bool = Field(..., description="Whether the record is enabled")
    in_stock: bool = Field(..., description="Whether the record is available")
    is_visible: bool = Field(..., description="Whether the record is shown on the storefront")


class ProductCreate(ListingFields):
    """Schema for product creation and full replacement."""

    type: ProductType = Field(..., description="Product kind")
    created_by_user_id: UUID
    new_from_date: datetime | None = None
    new_to_date: datetime | None = None


class ProductUpdate(BaseModel):
    """Schema for a partial product update. Omitted fields are kept."""

    model_config = _CAMEL_CONFIG

    name: str | None = Field(default=None, min_length=1, max_length=100)
    sku: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=255)
    url_key: str | None = Field(default=None, min_length=1, max_length=255)
    meta_title: str | None = Field(default=None, min_length=1, max_length=255)
    meta_description: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None
    in_stock: bool | None = None
    is_visible: bool | None = None
    type: ProductType | None = None
    created_by_user_id: UUID | None = None
    new_from_date: datetime | None = None
    new_to_date: datetime | None = None


class ProductResponse(ProductCreate):
    """Schema for product response."""

    id: UUID
    created_at: datetime
    updated_at: datetime


class VariantFields(ListingFields):
    """Schema for a variant full replacement."""


class VariantCreate(ListingFields):
    """Schema for one item of a variant creation batch.

    The variant is attached to the first listed parent; every listed
    parent must exist.
    """

    parent_product_ids: list[UUID] = Field(..., min_length=1)


class VariantUpdate(BaseModel):
    """Schema for a partial variant update. Omitted fields are kept."""

    model_config = _CAMEL_CONFIG

    name: str | None = Field(default=None, min_length=1, max_length=100)
    sku: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=255)
    url_key: str | None = Field(default=None, min_length=1, max_length=255)
    meta_title: str | None = Field(default=None, min_length=1, max_length=255)
    meta_description: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None
    in_stock: bool | None = None
    is_visible: bool | None = None


class VariantResponse(ListingFields):
    """Schema for variant response."""

    id: UUID
    parent_product_id: UUID
    created_at: datetime
    updated_at: datetime
