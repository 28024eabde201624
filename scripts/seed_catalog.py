#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and inserts sample products, each with a few
variants, through the catalog services so the usual uniqueness checks apply.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --products 25 --variants 3
"""

import argparse
import asyncio
import sys
import uuid
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.models import ProductType
from app.catalog.schemas import ProductCreate, VariantCreate
from app.catalog.service import ProductCatalogService
from app.catalog.variant_service import VariantCatalogService
from app.infrastructure.database import Base, async_session_factory, engine

SEED_USER_ID = uuid.UUID("123e4567-e89b-12d3-a456-426614174000")
PRODUCT_TYPES = list(ProductType)


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def sample_product(index: int) -> ProductCreate:
    """Build sample product number ``index``."""
    return ProductCreate(
        name=f"Sample Product {index}",
        sku=f"sample-product-sku-{index}",
        description=f"This is sample product {index} for demos and local testing.",
        url_key=f"sample-product-{index}",
        meta_title=f"Sample Product {index} Meta Title",
        meta_description=f"Sample product {index} meta description.",
        is_active=True,
        in_stock=index % 3 != 0,
        is_visible=True,
        type=PRODUCT_TYPES[index % len(PRODUCT_TYPES)],
        created_by_user_id=SEED_USER_ID,
    )


def sample_variants(index: int, parent_id: uuid.UUID, count: int) -> list[VariantCreate]:
    """Build ``count`` sample variants of product number ``index``."""
    return [
        VariantCreate(
            name=f"Sample Product {index} Variant {v}",
            sku=f"sample-product-sku-{index}-v{v}",
            description=f"Variant {v} of sample product {index}.",
            url_key=f"sample-product-{index}-v{v}",
            meta_title=f"Sample Product {index} Variant {v}",
            meta_description=f"Variant {v} of sample product {index}.",
            is_active=True,
            in_stock=True,
            is_visible=v == 1,
            parent_product_ids=[parent_id],
        )
        for v in range(1, count + 1)
    ]


async def seed(products: int, variants: int) -> dict[str, int]:
    """Insert sample products and variants.

    Args:
        products: Number of products to create.
        variants: Number of variants per product.

    Returns:
        Seeding result with counts.
    """
    created_products = 0
    created_variants = 0

    async with async_session_factory() as session:
        product_service = ProductCatalogService(session)
        variant_service = VariantCatalogService(session)

        for index in range(1, products + 1):
            product = await product_service.create(sample_product(index))
            created_products += 1

            if variants:
                batch = await variant_service.create(sample_variants(index, product.id, variants))
                created_variants += len(batch)

    return {"products_created": created_products, "variants_created": created_variants}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with sample data",
    )
    parser.add_argument(
        "--products",
        type=int,
        default=10,
        help="Number of sample products (default: 10)",
    )
    parser.add_argument(
        "--variants",
        type=int,
        default=2,
        help="Variants per product (default: 2)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Products: {args.products}")
    print(f"Variants per product: {args.variants}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(args.products, args.variants)

    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Variants: {result['variants_created']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
