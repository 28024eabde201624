"""Search, sort and pagination primitives shared by the catalog services.

The search filter always matches rows whose ID (as text) contains the
search value, OR-ed with one clause per enabled criteria flag.
"""

import math
from dataclasses import dataclass, fields
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import String, cast, or_
from sqlalchemy.sql.elements import ColumnElement

from app.catalog.models import ProductType
from app.domain.exceptions import InvalidArgumentError

T = TypeVar("T")

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class FieldKind(str, Enum):
    """How a searchable column is compared against the search value."""

    TEXT = "text"
    BOOLEAN = "boolean"
    PRODUCT_TYPE = "product_type"
    DATE_FROM = "date_from"
    DATE_TO = "date_to"


@dataclass
class SearchCriteria:
    """Per-field flags selecting which columns take part in a search.

    Flags naming columns the searched table does not have are ignored.
    """

    name: bool = False
    sku: bool = False
    description: bool = False
    url_key: bool = False
    meta_title: bool = False
    meta_description: bool = False
    created_by_user_id: bool = False
    is_active: bool = False
    in_stock: bool = False
    is_visible: bool = False
    type: bool = False
    new_from_date: bool = False
    new_to_date: bool = False

    def enabled(self) -> list[str]:
        """Names of the flags that are switched on, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name) is True]


@dataclass
class SortParams:
    """Sort parameters.

    Attributes:
        sort_field: Column to order by; None keeps storage order.
        sort_order: Sort direction.
    """

    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
    """

    page: int = 1
    limit: int = 20

    def validate(self) -> None:
        """Reject pages or limits below 1.

        Raises:
            InvalidArgumentError: If page or limit is less than 1.
        """
        if self.page < 1 or self.limit < 1:
            raise InvalidArgumentError(
                "Pagination parameters must be greater than 0",
                details={"page": self.page, "limit": self.limit},
            )

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count of rows matching the filter.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


# Searchable fields per table, keyed by criteria flag name.
PRODUCT_SEARCH_FIELDS: dict[str, FieldKind] = {
    "name": FieldKind.TEXT,
    "sku": FieldKind.TEXT,
    "description": FieldKind.TEXT,
    "url_key": FieldKind.TEXT,
    "meta_title": FieldKind.TEXT,
    "meta_description": FieldKind.TEXT,
    "created_by_user_id": FieldKind.TEXT,
    "is_active": FieldKind.BOOLEAN,
    "in_stock": FieldKind.BOOLEAN,
    "is_visible": FieldKind.BOOLEAN,
    "type": FieldKind.PRODUCT_TYPE,
    "new_from_date": FieldKind.DATE_FROM,
    "new_to_date": FieldKind.DATE_TO,
}

VARIANT_SEARCH_FIELDS: dict[str, FieldKind] = {
    "name": FieldKind.TEXT,
    "sku": FieldKind.TEXT,
    "description": FieldKind.TEXT,
    "url_key": FieldKind.TEXT,
    "meta_title": FieldKind.TEXT,
    "meta_description": FieldKind.TEXT,
    "is_active": FieldKind.BOOLEAN,
    "in_stock": FieldKind.BOOLEAN,
    "is_visible": FieldKind.BOOLEAN,
}

# Columns accepted as sort fields besides the searchable ones.
_EXTRA_SORT_FIELDS = ("id", "created_at", "updated_at")


def parse_bool(value: str) -> bool | None:
    """Parse a search value as a boolean.

    Args:
        value: Raw search text.

    Returns:
        The boolean, or None if the text is not a recognised boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def parse_datetime(value: str) -> datetime | None:
    """Parse a search value as an ISO-8601 date or datetime.

    Naive values are taken as UTC. A bare date maps to midnight.

    Args:
        value: Raw search text.

    Returns:
        Timezone-aware datetime, or None if the text does not parse.
    """
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text), time.min)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_product_type(value: str) -> ProductType | None:
    """Parse a search value as a product type, case-insensitively."""
    try:
        return ProductType(value.strip().lower())
    except ValueError:
        return None


_LIKE_ESCAPE = "\\"


def contains_pattern(value: str) -> str:
    """Build a LIKE pattern matching ``value`` literally anywhere in the text.

    ``%`` and ``_`` in the value are escaped with ``_LIKE_ESCAPE``.
    """
    escaped = (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _contains(column: Any, value: str) -> ColumnElement[bool]:
    return cast(column, String).ilike(contains_pattern(value), escape=_LIKE_ESCAPE)


def _field_clause(column: Any, kind: FieldKind, value: str) -> ColumnElement[bool] | None:
    if kind is FieldKind.TEXT:
        return _contains(column, value)
    if kind is FieldKind.BOOLEAN:
        flag = parse_bool(value)
        return None if flag is None else column == flag
    if kind is FieldKind.PRODUCT_TYPE:
        product_type = parse_product_type(value)
        return None if product_type is None else column == product_type
    moment = parse_datetime(value)
    if moment is None:
        return None
    if kind is FieldKind.DATE_FROM:
        return column >= moment
    return column <= moment


def build_search_predicate(
    model: Any,
    value: str,
    criteria: SearchCriteria,
    search_fields: dict[str, FieldKind],
) -> ColumnElement[bool]:
    """Fold the enabled criteria flags into one disjunctive filter.

    Args:
        model: Mapped class to search.
        value: Search text.
        criteria: Flags selecting the columns to search.
        search_fields: Searchable columns of the model and how to compare them.

    Returns:
        SQLAlchemy boolean expression.
    """
    clauses: list[ColumnElement[bool]] = [_contains(model.id, value)]

    for flag in criteria.enabled():
        kind = search_fields.get(flag)
        if kind is None:
            continue
        clause = _field_clause(getattr(model, flag), kind, value)
        if clause is not None:
            clauses.append(clause)

    return or_(*clauses)


def _snake_case(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


def resolve_sort_column(
    model: Any,
    sort: SortParams,
    search_fields: dict[str, FieldKind],
) -> Any | None:
    """Get the ORDER BY expression for the requested sort.

    Accepts both camelCase (``urlKey``) and snake_case (``url_key``) names.

    Args:
        model: Mapped class being queried.
        sort: Requested sort.
        search_fields: Searchable columns of the model.

    Returns:
        Ordered column expression, or None when no sort field is set.

    Raises:
        InvalidArgumentError: If the sort field is not a sortable column.
    """
    if not sort.sort_field:
        return None

    field_name = _snake_case(sort.sort_field)
    if field_name not in search_fields and field_name not in _EXTRA_SORT_FIELDS:
        raise InvalidArgumentError(
            f"Cannot sort by '{sort.sort_field}'",
            details={"sort_field": sort.sort_field},
        )

    column = getattr(model, field_name)
    if sort.sort_order == SortOrder.DESC:
        return column.desc()
    return column.asc()
