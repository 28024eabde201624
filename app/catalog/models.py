"""SQLAlchemy models for product catalog.

Defines Product and Variant tables for persistent storage.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.database import Base


class ProductType(str, enum.Enum):
    """Kinds of product the catalog can hold."""

    SIMPLE = "simple"
    CONFIGURABLE = "configurable"
    VIRTUAL = "virtual"
    DOWNLOADABLE = "downloadable"
    BUNDLE = "bundle"
    GROUPED = "grouped"
    GIFT_CARD = "gift_card"
    CUSTOMIZABLE = "customizable"
    SUBSCRIPTION = "subscription"


# Name of the variants -> products foreign key
PARENT_PRODUCT_FK = "fk_variants_parent_product_id"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def unique_listing_constraints(table: str) -> tuple[UniqueConstraint, UniqueConstraint]:
    """Build the (name, sku, url_key) unique constraint for a catalog table.

    PostgreSQL gets a constraint checked at commit time. SQLite cannot defer
    unique constraints, so it gets a plain one under a separate name.

    Args:
        table: Table name used to derive the constraint name.

    Returns:
        The PostgreSQL and SQLite variants of the constraint.
    """
    deferred = UniqueConstraint(
        "name",
        "sku",
        "url_key",
        name=f"uq_{table}_name_sku_url_key",
        deferrable=True,
        initially="DEFERRED",
    ).ddl_if(dialect="postgresql")
    immediate = UniqueConstraint(
        "name",
        "sku",
        "url_key",
        name=f"uq_{table}_name_sku_url_key_immediate",
    ).ddl_if(dialect="sqlite")
    return deferred, immediate


class CatalogRecordMixin:
    """Columns shared by products and variants.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name.
        sku: Stock Keeping Unit.
        description: Long description.
        url_key: Storefront URL slug.
        meta_title: SEO title.
        meta_description: SEO description.
        is_active: Whether the record is enabled.
        in_stock: Whether the record is available.
        is_visible: Whether the record is shown on the storefront.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    url_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_title: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_description: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )


class Product(CatalogRecordMixin, Base):
    """Product entity in the catalog.

    Attributes:
        type: Product kind.
        created_by_user_id: User that created the product.
        new_from_date: Start of the "new product" window.
        new_to_date: End of the "new product" window.
        variants: Variants attached to this product.
    """

    __tablename__ = "products"

    type: Mapped[ProductType] = mapped_column(
        Enum(
            ProductType,
            native_enum=False,
            length=32,
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
        default=ProductType.SIMPLE,
    )
    created_by_user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    new_from_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    new_to_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    variants: Mapped[list["Variant"]] = relationship(
        "Variant",
        back_populates="parent_product",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = unique_listing_constraints("products")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, sku={self.sku}, name={self.name})>"


class Variant(CatalogRecordMixin, Base):
    """Variant of a product (e.g., a size or colour listing).

    Attributes:
        parent_product_id: Owning product ID.
        parent_product: Owning product.
    """

    __tablename__ = "variants"

    parent_product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE", name=PARENT_PRODUCT_FK),
        nullable=False,
        index=True,
    )

    # Relationships
    parent_product: Mapped["Product"] = relationship("Product", back_populates="variants")

    __table_args__ = unique_listing_constraints("variants")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Variant(id={self.id}, sku={self.sku}, name={self.name})>"
