"""API schemas for the catalog API.

Pydantic models for responses that are not catalog records themselves.
Record schemas live in :mod:`app.catalog.schemas`.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.catalog.schemas import ProductResponse, VariantResponse


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")


class DeleteResponse(BaseModel):
    """Result of a bulk delete."""

    deleted: int = Field(..., description="Number of deleted records")


# ============================================================================
# Catalog List Schemas
# ============================================================================


class ProductListResponse(PaginatedResponse):
    """Paginated list of products."""

    products: list[ProductResponse] = Field(..., description="Products on this page")


class VariantListResponse(PaginatedResponse):
    """Paginated list of variants."""

    variants: list[VariantResponse] = Field(..., description="Variants on this page")
