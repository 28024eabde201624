"""Catalog services for product and variant operations.

High-level services that combine repository operations with the catalog
business rules: name/SKU/URL key uniqueness, pagination bounds, and the
free-text search over selected columns.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, Generic
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.conflicts import conflict_error, raise_on_conflicts
from app.catalog.models import PARENT_PRODUCT_FK, Product
from app.catalog.repository import CatalogRepository, ModelT
from app.catalog.schemas import ProductCreate, ProductUpdate
from app.catalog.search import (
    PRODUCT_SEARCH_FIELDS,
    FieldKind,
    PaginatedResult,
    PaginationParams,
    SearchCriteria,
    SortParams,
    build_search_predicate,
    resolve_sort_column,
)
from app.domain.exceptions import ConflictError, DomainError, NotFoundError, StoreFailureError

logger = structlog.get_logger()

# Product fields a partial update may set back to null
NULLABLE_PRODUCT_FIELDS = frozenset({"new_from_date", "new_to_date"})


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Whether an integrity error comes from the parent product foreign key."""
    message = str(error.orig)
    return PARENT_PRODUCT_FK in message or "FOREIGN KEY constraint failed" in message


class BaseCatalogService(Generic[ModelT]):
    """Operations shared by the product and variant services.

    Subclasses set ``model``, ``entity_type`` and ``search_fields``.
    Every mutating call is one unit of work: checks and writes share the
    session's transaction, which is committed once at the end.
    """

    model: type[ModelT]
    entity_type: str
    search_fields: dict[str, FieldKind]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository: CatalogRepository[ModelT] = CatalogRepository(session, self.model)

    @asynccontextmanager
    async def _unit_of_work(
        self,
        operation: str,
        commit: bool = True,
        parent_ids: Sequence[UUID] = (),
    ) -> AsyncIterator[None]:
        """Run a block against the store and translate its failures.

        Constraint violations become ConflictError, or NotFoundError for
        ``parent_ids`` when the parent product foreign key fired. Other
        SQLAlchemy errors become StoreFailureError. The transaction is
        rolled back on every failure, which expires every instance loaded
        through this session.

        Args:
            operation: Operation name used in logs and errors.
            commit: Whether to commit when the block succeeds.
            parent_ids: Parent product IDs the block references.
        """
        try:
            yield
            if commit:
                await self.session.commit()
        except DomainError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            if is_foreign_key_violation(e):
                missing = [str(pid) for pid in parent_ids]
                logger.warning(
                    "Parent product vanished before insert",
                    operation=operation,
                    parent_ids=missing,
                )
                raise NotFoundError("Product", missing) from e
            logger.warning(
                "Uniqueness constraint violated",
                entity_type=self.entity_type,
                operation=operation,
                error=str(e.orig),
            )
            raise conflict_error(self.entity_type, {}) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Store operation failed",
                entity_type=self.entity_type,
                operation=operation,
                error=str(e),
            )
            raise StoreFailureError(operation) from e

    async def _conflict_check(
        self,
        names: Sequence[str],
        skus: Sequence[str],
        url_keys: Sequence[str],
        exclude_id: UUID | None = None,
    ) -> None:
        rows = await self.repository.find_conflicts(names, skus, url_keys, exclude_id)
        if rows:
            logger.warning(
                "Catalog conflict detected",
                entity_type=self.entity_type,
                matches=len(rows),
                exclude_id=str(exclude_id) if exclude_id else None,
            )
        raise_on_conflicts(self.entity_type, rows, names, skus, url_keys)

    async def _get_or_raise(self, record_id: UUID) -> ModelT:
        record = await self.repository.get_by_id(record_id)
        if record is None:
            logger.warning(
                f"{self.entity_type} not found",
                entity_id=str(record_id),
            )
            raise NotFoundError(self.entity_type, [str(record_id)])
        return record

    async def get(self, record_id: UUID) -> ModelT:
        """Get one record by ID.

        Raises:
            NotFoundError: If no record has this ID.
        """
        async with self._unit_of_work("get", commit=False):
            return await self._get_or_raise(record_id)

    async def find_by_ids(
        self,
        ids: Sequence[UUID],
        pagination: PaginationParams,
    ) -> list[ModelT]:
        """Find one page of records by ID.

        Args:
            ids: Record IDs.
            pagination: Page and limit.

        Returns:
            Records on the requested page, in storage order.

        Raises:
            InvalidArgumentError: If page or limit is below 1.
        """
        pagination.validate()
        async with self._unit_of_work("find_by_ids", commit=False):
            items, _ = await self.repository.find_paginated(
                self.model.id.in_(ids),
                offset=pagination.offset,
                limit=pagination.limit,
            )
        return items

    async def find_by_skus(
        self,
        skus: Sequence[str],
        pagination: PaginationParams,
    ) -> list[ModelT]:
        """Find one page of records by SKU.

        Args:
            skus: SKUs to match.
            pagination: Page and limit.

        Returns:
            Records on the requested page, in storage order.

        Raises:
            InvalidArgumentError: If page or limit is below 1.
        """
        pagination.validate()
        async with self._unit_of_work("find_by_skus", commit=False):
            items, _ = await self.repository.find_paginated(
                self.model.sku.in_(skus),
                offset=pagination.offset,
                limit=pagination.limit,
            )
        return items

    async def search(
        self,
        value: str,
        pagination: PaginationParams,
        sort: SortParams | None = None,
        criteria: SearchCriteria | None = None,
    ) -> PaginatedResult[ModelT]:
        """Search records by ID text and the columns selected in ``criteria``.

        Args:
            value: Search text.
            pagination: Page and limit.
            sort: Optional single-field sort.
            criteria: Columns to search besides the ID.

        Returns:
            Paginated search results.

        Raises:
            InvalidArgumentError: On bad pagination or an unknown sort field.
        """
        pagination.validate()
        sort = sort or SortParams()
        criteria = criteria or SearchCriteria()

        predicate = build_search_predicate(self.model, value, criteria, self.search_fields)
        order_by = resolve_sort_column(self.model, sort, self.search_fields)

        async with self._unit_of_work("search", commit=False):
            items, total = await self.repository.find_paginated(
                predicate,
                offset=pagination.offset,
                limit=pagination.limit,
                order_by=order_by,
            )

        logger.debug(
            "Catalog search",
            entity_type=self.entity_type,
            value=value,
            criteria=criteria.enabled(),
            total=total,
        )

        return PaginatedResult(
            items=items,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def _replace(self, record_id: UUID, values: dict[str, Any]) -> ModelT:
        async with self._unit_of_work("update"):
            await self._conflict_check(
                [values["name"]],
                [values["sku"]],
                [values["url_key"]],
                exclude_id=record_id,
            )
            await self.repository.update_by_id(record_id, values)
            record = await self._get_or_raise(record_id)

        logger.info(
            f"{self.entity_type} updated",
            entity_id=str(record_id),
        )
        return record

    async def delete(self, ids: Sequence[UUID]) -> dict[str, int]:
        """Delete every record whose ID is in ``ids``.

        Args:
            ids: Record IDs; unknown IDs are skipped.

        Returns:
            ``{"deleted": n}`` with the number of rows removed.

        Raises:
            ConflictError: If none of the IDs matched a record.
        """
        async with self._unit_of_work("delete"):
            deleted = await self.repository.delete_by_ids(ids)
            if deleted == 0:
                raise ConflictError(
                    f"No {self.entity_type.lower()}s found to delete",
                    details={"ids": [str(i) for i in ids]},
                )

        logger.info(
            f"{self.entity_type}s deleted",
            requested=len(ids),
            deleted=deleted,
        )
        return {"deleted": deleted}


class ProductCatalogService(BaseCatalogService[Product]):
    """Service for product operations.

    Example usage:
        async with async_session_factory() as session:
            service = ProductCatalogService(session)
            product = await service.create(product_data)
            page = await service.search(
                "Sample",
                PaginationParams(page=1, limit=20),
                criteria=SearchCriteria(name=True),
            )
    """

    model = Product
    entity_type = "Product"
    search_fields = PRODUCT_SEARCH_FIELDS

    async def create(self, data: ProductCreate) -> Product:
        """Create a new product.

        Args:
            data: Product creation data.

        Returns:
            Created product.

        Raises:
            ConflictError: If the name, SKU or URL key is already used.
        """
        async with self._unit_of_work("create"):
            await self._conflict_check([data.name], [data.sku], [data.url_key])
            product = Product(**data.model_dump())
            await self.repository.save_all([product])

        logger.info(
            "Product created",
            product_id=str(product.id),
            sku=product.sku,
        )
        return product

    async def update(self, product_id: UUID, data: ProductCreate) -> Product:
        """Overwrite every mutable field of a product.

        Args:
            product_id: Product ID.
            data: New field values.

        Returns:
            The product as stored after the update.

        Raises:
            ConflictError: If another product uses the name, SKU or URL key.
            NotFoundError: If the product does not exist.
        """
        return await self._replace(product_id, data.model_dump())

    async def patch(self, product_id: UUID, changes: ProductUpdate) -> Product:
        """Update only the fields present in ``changes``.

        A null clears ``new_from_date`` or ``new_to_date``; on any other
        field it is ignored.

        Raises:
            ConflictError: If another product uses the name, SKU or URL key.
            NotFoundError: If the product does not exist.
        """
        current = await self.get(product_id)
        merged = ProductCreate.model_validate(current).model_dump()
        merged.update(
            (field, value)
            for field, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_PRODUCT_FIELDS
        )
        return await self.update(product_id, ProductCreate(**merged))
