"""Uniqueness conflict reporting shared by the catalog services."""

from collections.abc import Sequence
from typing import Any

from app.domain.exceptions import ConflictError

# (attribute on the conflicting row, label used in the message)
_CONFLICT_FIELDS = (
    ("name", "name"),
    ("sku", "SKU"),
    ("url_key", "URL key"),
)


def collect_conflicts(
    rows: Sequence[Any],
    names: Sequence[str],
    skus: Sequence[str],
    url_keys: Sequence[str],
) -> dict[str, list[str]]:
    """Work out which requested values collide with existing rows.

    Args:
        rows: Existing rows returned by the conflict query.
        names: Requested names.
        skus: Requested SKUs.
        url_keys: Requested URL keys.

    Returns:
        Mapping of field name to the colliding values, in row order and
        without duplicates. Fields with no collision are left out.
    """
    requested = {"name": set(names), "sku": set(skus), "url_key": set(url_keys)}
    conflicts: dict[str, list[str]] = {}

    for attribute, _ in _CONFLICT_FIELDS:
        matched: list[str] = []
        for row in rows:
            row_value = getattr(row, attribute)
            if row_value in requested[attribute] and row_value not in matched:
                matched.append(row_value)
        if matched:
            conflicts[attribute] = matched

    return conflicts


def conflict_error(entity_type: str, conflicts: dict[str, list[str]]) -> ConflictError:
    """Build the error reported when a write would duplicate existing values.

    Args:
        entity_type: "Product" or "Variant".
        conflicts: Output of :func:`collect_conflicts`.

    Returns:
        ConflictError naming each colliding field and its values, or a
        generic message when the colliding fields are unknown (for example
        when the database constraint fired at commit).
    """
    parts = [
        f"{label}: {', '.join(conflicts[attribute])}"
        for attribute, label in _CONFLICT_FIELDS
        if attribute in conflicts
    ]
    if not parts:
        return ConflictError(
            f"{entity_type} with this SKU, name or URL key already exists",
            details={"conflicts": {}},
        )
    return ConflictError(
        f"{entity_type} with the same {', '.join(parts)} already exists.",
        details={"conflicts": conflicts},
    )


def raise_on_conflicts(
    entity_type: str,
    rows: Sequence[Any],
    names: Sequence[str],
    skus: Sequence[str],
    url_keys: Sequence[str],
) -> None:
    """Raise ConflictError if the conflict query returned any row.

    Raises:
        ConflictError: If any row matched.
    """
    if not rows:
        return
    conflicts = collect_conflicts(rows, names, skus, url_keys)
    raise conflict_error(entity_type, conflicts)
