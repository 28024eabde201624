"""Tests for uniqueness conflict reporting."""

from types import SimpleNamespace

import pytest

from app.catalog.conflicts import collect_conflicts, conflict_error, raise_on_conflicts
from app.domain.exceptions import ConflictError


def _row(name: str, sku: str, url_key: str) -> SimpleNamespace:
    return SimpleNamespace(name=name, sku=sku, url_key=url_key)


class TestCollectConflicts:
    """Tests for collect_conflicts."""

    def test_only_colliding_fields_reported(self) -> None:
        """A row matched on SKU alone reports only the SKU."""
        rows = [_row("Other", "sku-1", "other-key")]

        conflicts = collect_conflicts(rows, ["Mine"], ["sku-1"], ["my-key"])

        assert conflicts == {"sku": ["sku-1"]}

    def test_values_deduplicated_in_row_order(self) -> None:
        """Each colliding value is listed once."""
        rows = [_row("A", "sku-2", "a"), _row("A", "sku-1", "b")]

        conflicts = collect_conflicts(rows, ["A"], ["sku-1", "sku-2"], ["z"])

        assert conflicts == {"name": ["A"], "sku": ["sku-2", "sku-1"]}


class TestConflictError:
    """Tests for conflict_error."""

    def test_message_lists_fields(self) -> None:
        """Message names each field and its values."""
        error = conflict_error(
            "Product",
            {"name": ["Shirt"], "sku": ["sku-1", "sku-2"], "url_key": ["shirt"]},
        )

        assert error.message == (
            "Product with the same name: Shirt, SKU: sku-1, sku-2, URL key: shirt already exists."
        )
        assert error.error_code == "CONFLICT"

    def test_generic_message_without_fields(self) -> None:
        """Unknown colliding fields give the generic message."""
        error = conflict_error("Variant", {})

        assert error.message == "Variant with this SKU, name or URL key already exists"


class TestRaiseOnConflicts:
    """Tests for raise_on_conflicts."""

    def test_no_rows_passes(self) -> None:
        """No matching rows raises nothing."""
        raise_on_conflicts("Product", [], ["a"], ["b"], ["c"])

    def test_rows_raise(self) -> None:
        """Any matching row raises ConflictError."""
        with pytest.raises(ConflictError) as exc_info:
            raise_on_conflicts("Variant", [_row("a", "x", "y")], ["a"], ["b"], ["c"])

        assert exc_info.value.details["conflicts"] == {"name": ["a"]}
