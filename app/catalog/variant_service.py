"""Variant service.

Variants are created in batches. A batch is written only if none of its
names, SKUs or URL keys is already used by a variant and every parent
product it references exists.
"""

from collections.abc import Sequence
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product, Variant
from app.catalog.repository import CatalogRepository
from app.catalog.schemas import VariantCreate, VariantFields, VariantUpdate
from app.catalog.search import VARIANT_SEARCH_FIELDS
from app.catalog.service import BaseCatalogService
from app.domain.exceptions import NotFoundError

logger = structlog.get_logger()


class VariantCatalogService(BaseCatalogService[Variant]):
    """Service for variant operations."""

    model = Variant
    entity_type = "Variant"
    search_fields = VARIANT_SEARCH_FIELDS

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.products: CatalogRepository[Product] = CatalogRepository(session, Product)

    async def create(self, items: Sequence[VariantCreate]) -> list[Variant]:
        """Create a batch of variants.

        Args:
            items: Variant creation requests.

        Returns:
            Created variants, in request order.

        Raises:
            ConflictError: If any name, SKU or URL key is already used.
            NotFoundError: If any referenced parent product does not exist.
        """
        if not items:
            return []

        parent_ids = list(dict.fromkeys(pid for item in items for pid in item.parent_product_ids))
        names = [item.name for item in items]
        skus = [item.sku for item in items]
        url_keys = [item.url_key for item in items]

        async with self._unit_of_work("create", parent_ids=parent_ids):
            await self._conflict_check(names, skus, url_keys)
            await self._find_parent_products(parent_ids)

            variants = [
                Variant(
                    **item.model_dump(exclude={"parent_product_ids"}),
                    parent_product_id=item.parent_product_ids[0],
                )
                for item in items
            ]
            await self.repository.save_all(variants)

        logger.info(
            "Variants created",
            count=len(variants),
            parent_product_ids=[str(pid) for pid in parent_ids],
        )
        return variants

    async def _find_parent_products(self, ids: list[UUID]) -> list[Product]:
        if not ids:
            return []

        products = list(await self.products.find_by_ids(ids))
        found = {product.id for product in products}
        missing = [str(pid) for pid in ids if pid not in found]
        if missing:
            logger.warning("Parent products not found", missing=missing)
            raise NotFoundError("Product", missing)

        return products

    async def update(self, variant_id: UUID, data: VariantFields) -> Variant:
        """Overwrite every mutable field of a variant.

        Args:
            variant_id: Variant ID.
            data: New field values.

        Returns:
            The variant as stored after the update.

        Raises:
            ConflictError: If another variant uses the name, SKU or URL key.
            NotFoundError: If the variant does not exist.
        """
        return await self._replace(variant_id, data.model_dump())

    async def patch(self, variant_id: UUID, changes: VariantUpdate) -> Variant:
        """Update only the fields present in ``changes``; nulls are ignored.

        Raises:
            ConflictError: If another variant uses the name, SKU or URL key.
            NotFoundError: If the variant does not exist.
        """
        current = await self.get(variant_id)
        merged = VariantFields.model_validate(current).model_dump()
        merged.update(changes.model_dump(exclude_unset=True, exclude_none=True))
        return await self.update(variant_id, VariantFields(**merged))
