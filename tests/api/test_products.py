"""Tests for product endpoints."""

import uuid
from typing import Any

from fastapi.testclient import TestClient

from tests.factories import CREATED_BY_USER_ID, product_payload


class TestCreateProduct:
    """Tests for POST /products."""

    def test_create_product(self, client: TestClient) -> None:
        """Should create a product and return it in camelCase."""
        response = client.post("/products", json=product_payload("1"))

        assert response.status_code == 201
        data = response.json()
        uuid.UUID(data["id"])
        assert data["name"] == "Sample Product 1"
        assert data["urlKey"] == "sample-product-url-key-1"
        assert data["createdByUserId"] == str(CREATED_BY_USER_ID)
        assert data["type"] == "simple"
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_create_duplicate_returns_409(
        self, client: TestClient, product: dict[str, Any]
    ) -> None:
        """Should reject a product reusing a SKU."""
        response = client.post(
            "/products",
            json=product_payload("2", sku=product["sku"]),
        )

        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "CONFLICT"
        assert data["message"] == "Product with the same SKU: sample-product-sku-1 already exists."
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_missing_field_returns_400(self, client: TestClient) -> None:
        """Should return 400 with a detail per invalid field."""
        payload = product_payload("1")
        del payload["sku"]

        response = client.post("/products", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert any(detail["field"] == "body.sku" for detail in data["details"])

    def test_name_too_long_returns_400(self, client: TestClient) -> None:
        """Should reject names over 100 characters."""
        payload = product_payload("1")
        payload["name"] = "x" * 101

        response = client.post("/products", json=payload)

        assert response.status_code == 400

    def test_unknown_type_returns_400(self, client: TestClient) -> None:
        """Should reject product types outside the enumeration."""
        payload = product_payload("1")
        payload["type"] = "widget"

        response = client.post("/products", json=payload)

        assert response.status_code == 400

    def test_missing_type_returns_400(self, client: TestClient) -> None:
        """Should require the product type."""
        payload = product_payload("1")
        del payload["type"]

        response = client.post("/products", json=payload)

        assert response.status_code == 400
        assert any(detail["field"] == "body.type" for detail in response.json()["details"])


class TestReadProducts:
    """Tests for product lookups."""

    def test_get_product(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should return the product by ID."""
        response = client.get(f"/products/{product['id']}")

        assert response.status_code == 200
        assert response.json()["sku"] == product["sku"]

    def test_get_unknown_returns_404(self, client: TestClient) -> None:
        """Should return 404 for an unknown ID."""
        missing = uuid.uuid4()

        response = client.get(f"/products/{missing}")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "NOT_FOUND"
        assert data["message"] == f"Product with ID {missing} not found"

    def test_get_malformed_id_returns_400(self, client: TestClient) -> None:
        """Should reject IDs that are not UUIDs."""
        response = client.get("/products/not-a-uuid")

        assert response.status_code == 400

    def test_list_by_ids(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should return products matching the given IDs."""
        response = client.get(
            "/products",
            params={"ids": [product["id"], str(uuid.uuid4())]},
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [product["id"]]

    def test_list_by_sku(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should match products on SKU."""
        client.post("/products", json=product_payload("2"))

        response = client.get("/products/by-sku", params={"skus": [product["sku"]]})

        assert response.status_code == 200
        assert [p["sku"] for p in response.json()] == [product["sku"]]

    def test_page_zero_returns_400(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should reject pages below 1."""
        response = client.get("/products", params={"ids": [product["id"]], "page": 0})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_ARGUMENT"
        assert data["message"] == "Pagination parameters must be greater than 0"

    def test_limit_above_maximum_returns_400(self, client: TestClient) -> None:
        """Should reject limits above the configured maximum."""
        response = client.get("/products/search", params={"limit": 1000})

        assert response.status_code == 400


class TestSearchProducts:
    """Tests for GET /products/search."""

    def test_search_returns_page_metadata(self, client: TestClient) -> None:
        """Should return products with pagination metadata."""
        for i in range(1, 4):
            client.post("/products", json=product_payload(str(i)))

        response = client.get("/products/search", params={"page": 1, "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 1
        assert data["limit"] == 2
        assert data["totalPages"] == 2
        assert len(data["products"]) == 2

    def test_search_by_name_flag(self, client: TestClient) -> None:
        """Should search names only when the name flag is set."""
        client.post("/products", json=product_payload("1", name="Blue Shirt"))
        client.post("/products", json=product_payload("2", name="Red Hat"))

        with_flag = client.get("/products/search", params={"value": "shirt", "name": "true"})
        without_flag = client.get("/products/search", params={"value": "shirt"})

        assert [p["name"] for p in with_flag.json()["products"]] == ["Blue Shirt"]
        assert without_flag.json()["total"] == 0

    def test_search_by_camel_case_flag(self, client: TestClient) -> None:
        """Should accept camelCase flag names."""
        client.post("/products", json=product_payload("1", in_stock=True))
        client.post("/products", json=product_payload("2", in_stock=False))

        response = client.get("/products/search", params={"value": "true", "inStock": "true"})

        assert [p["sku"] for p in response.json()["products"]] == ["sample-product-sku-1"]

    def test_search_sorted(self, client: TestClient) -> None:
        """Should apply sortField and sortOrder."""
        for name in ["Alpha", "Charlie", "Bravo"]:
            client.post("/products", json=product_payload(name.lower(), name=name))

        response = client.get(
            "/products/search",
            params={"sortField": "name", "sortOrder": "DESC"},
        )

        assert [p["name"] for p in response.json()["products"]] == ["Charlie", "Bravo", "Alpha"]

    def test_unknown_sort_field_returns_400(self, client: TestClient) -> None:
        """Should reject sort fields that are not columns."""
        response = client.get("/products/search", params={"sortField": "price"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"


class TestUpdateProduct:
    """Tests for PUT and PATCH /products/{id}."""

    def test_replace_product(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should overwrite the product's fields."""
        response = client.put(
            f"/products/{product['id']}",
            json=product_payload("1", name="Renamed", type="bundle"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == product["id"]
        assert data["name"] == "Renamed"
        assert data["type"] == "bundle"

    def test_replace_without_type_returns_400(self, client: TestClient) -> None:
        """Should reject a full replace that omits the type and keep the stored one."""
        created = client.post("/products", json=product_payload("1", type="bundle")).json()
        payload = product_payload("1", name="Renamed")
        del payload["type"]

        response = client.put(f"/products/{created['id']}", json=payload)

        assert response.status_code == 400
        stored = client.get(f"/products/{created['id']}").json()
        assert stored["type"] == "bundle"
        assert stored["name"] == "Sample Product 1"

    def test_replace_unknown_returns_404(self, client: TestClient) -> None:
        """Should return 404 when the product does not exist."""
        response = client.put(f"/products/{uuid.uuid4()}", json=product_payload("1"))

        assert response.status_code == 404

    def test_replace_with_taken_url_key_returns_409(
        self, client: TestClient, product: dict[str, Any]
    ) -> None:
        """Should reject taking another product's URL key."""
        other = client.post("/products", json=product_payload("2")).json()

        response = client.put(
            f"/products/{other['id']}",
            json=product_payload("2", url_key=product["urlKey"]),
        )

        assert response.status_code == 409

    def test_patch_product(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should change only the fields in the body."""
        response = client.patch(
            f"/products/{product['id']}",
            json={"isVisible": True, "metaTitle": "New Title"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["isVisible"] is True
        assert data["metaTitle"] == "New Title"
        assert data["name"] == product["name"]


    def test_patch_null_clears_new_from_date(self, client: TestClient) -> None:
        """Should clear a nullable date sent as null."""
        created = client.post(
            "/products",
            json=product_payload("1", new_from_date="2023-07-01T00:00:00Z"),
        ).json()

        response = client.patch(f"/products/{created['id']}", json={"newFromDate": None})

        assert response.status_code == 200
        assert response.json()["newFromDate"] is None


class TestDeleteProducts:
    """Tests for DELETE /products."""

    def test_delete_products(self, client: TestClient, product: dict[str, Any]) -> None:
        """Should delete and report the count."""
        response = client.delete("/products", params={"ids": [product["id"]]})

        assert response.status_code == 200
        assert response.json() == {"deleted": 1}
        assert client.get(f"/products/{product['id']}").status_code == 404

    def test_delete_unknown_returns_409(self, client: TestClient) -> None:
        """Should return 409 when nothing matched."""
        response = client.delete("/products", params={"ids": [str(uuid.uuid4())]})

        assert response.status_code == 409
        assert response.json()["message"] == "No products found to delete"
