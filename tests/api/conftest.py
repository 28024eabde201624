"""Shared fixtures for API tests."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from tests.factories import product_payload


@pytest.fixture
def product(client: TestClient) -> dict[str, Any]:
    """Create one product through the API."""
    response = client.post("/products", json=product_payload("1"))
    assert response.status_code == 201
    return response.json()
