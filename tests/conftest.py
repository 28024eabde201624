"""Shared fixtures for catalog tests.

Service and API tests run against an in-memory SQLite database through
aiosqlite.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.catalog.service import ProductCatalogService
from app.catalog.variant_service import VariantCatalogService
from app.infrastructure.database import Base, get_session
from app.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_test_engine() -> AsyncEngine:
    """Create an engine over one shared in-memory SQLite connection.

    Foreign keys are enforced, as they are on PostgreSQL.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(test_engine.sync_engine, "connect", _enable_foreign_keys)
    return test_engine


async def create_tables(engine: AsyncEngine) -> None:
    """Create all catalog tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database for one test."""
    test_engine = create_test_engine()
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as test_session:
        yield test_session


@pytest_asyncio.fixture
async def product_service(session: AsyncSession) -> ProductCatalogService:
    """Create product service on the test session."""
    return ProductCatalogService(session)


@pytest_asyncio.fixture
async def variant_service(session: AsyncSession) -> VariantCatalogService:
    """Create variant service on the test session."""
    return VariantCatalogService(session)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client backed by a fresh in-memory database."""
    test_engine = create_test_engine()
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as test_session:
            yield test_session

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        test_client.portal.call(create_tables, test_engine)
        yield test_client
        test_client.portal.call(test_engine.dispose)
    app.dependency_overrides.clear()
