"""Catalog repositories for database operations.

Provides the queries the catalog services need for products and variants:
lookups by ID or SKU, filtered pagination, conflict lookups, and bulk
update/delete by ID.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.catalog.models import Product, Variant

ModelT = TypeVar("ModelT", Product, Variant)


class CatalogRepository(Generic[ModelT]):
    """Repository for one catalog table.

    Handles all database interactions for a mapped catalog model. Writes are
    flushed but never committed; the calling service owns the transaction.

    Example usage:
        async with async_session_factory() as session:
            repo = CatalogRepository(session, Product)
            products, total = await repo.find_paginated(
                predicate=Product.in_stock.is_(True),
                offset=0,
                limit=20,
            )
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
            model: Mapped class this repository reads and writes.
        """
        self.session = session
        self.model = model

    async def save_all(self, records: list[ModelT]) -> list[ModelT]:
        """Save multiple records to database.

        Args:
            records: Records to save.

        Returns:
            Saved records with generated IDs and timestamps populated.
        """
        self.session.add_all(records)
        await self.session.flush()
        return records

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """Get record by ID.

        Args:
            record_id: Record ID.

        Returns:
            Record if found, None otherwise.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_by_ids(self, ids: Sequence[UUID]) -> Sequence[ModelT]:
        """Get every record whose ID is in ``ids``.

        Args:
            ids: Record IDs.

        Returns:
            Matching records, in storage order.
        """
        if not ids:
            return []
        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return result.scalars().all()

    async def find_paginated(
        self,
        predicate: ColumnElement[bool],
        offset: int,
        limit: int,
        order_by: Any | None = None,
    ) -> tuple[list[ModelT], int]:
        """Find one page of records matching a filter.

        Args:
            predicate: Filter expression.
            offset: Rows to skip.
            limit: Maximum rows to return.
            order_by: Optional ORDER BY expression; storage order otherwise.

        Returns:
            Tuple of (records on the page, total count matching the filter).
        """
        count_result = await self.session.execute(
            select(func.count()).select_from(self.model).where(predicate)
        )
        total = count_result.scalar_one()

        query = select(self.model).where(predicate)
        if order_by is not None:
            query = query.order_by(order_by)
        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def find_conflicts(
        self,
        names: Sequence[str],
        skus: Sequence[str],
        url_keys: Sequence[str],
        exclude_id: UUID | None = None,
    ) -> Sequence[Any]:
        """Find rows sharing any name, SKU or URL key with the given values.

        Args:
            names: Names to look for.
            skus: SKUs to look for.
            url_keys: URL keys to look for.
            exclude_id: Record to leave out (the one being updated).

        Returns:
            Rows with ``name``, ``sku`` and ``url_key`` attributes.
        """
        predicate: ColumnElement[bool] = or_(
            self.model.name.in_(names),
            self.model.sku.in_(skus),
            self.model.url_key.in_(url_keys),
        )
        if exclude_id is not None:
            predicate = and_(predicate, self.model.id != exclude_id)

        result = await self.session.execute(
            select(self.model.name, self.model.sku, self.model.url_key).where(predicate)
        )
        return result.all()

    async def update_by_id(self, record_id: UUID, values: dict[str, Any]) -> int:
        """Overwrite columns of one record.

        Args:
            record_id: Record ID.
            values: Column values to set.

        Returns:
            Number of rows updated.
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_ids(self, ids: Sequence[UUID]) -> int:
        """Delete every record whose ID is in ``ids``.

        Args:
            ids: Record IDs.

        Returns:
            Number of deleted rows.
        """
        if not ids:
            return 0
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
