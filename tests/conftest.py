"""
Product Catalog API — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── sql_store: real SQLProductStore on a fresh in-memory SQLite database
    ├── mock_store: AsyncMock shaped like ProductStore (healthy, empty)
    ├── failing_store: AsyncMock whose every operation raises
    ├── laptop_payload: the request body used by most scenarios
    ├── test_client: HTTPX AsyncClient bound to an app around sql_store
    └── make_client: builds a client around any store / settings
"""

import os
from contextlib import asynccontextmanager
from typing import Optional
from unittest.mock import AsyncMock

# Must be set before any product_api import: main.py builds `app` at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from product_api.config import Settings
from product_api.database import build_engine
from product_api.main import create_app
from product_api.services.sql_store import SQLProductStore
from product_api.services.store import ProductStore


@pytest_asyncio.fixture
async def sql_store():
    """
    A connected SQLProductStore on its own in-memory database.

    StaticPool keeps the single connection alive, so the table created by
    connect() is visible to every later session.
    """
    store = SQLProductStore(build_engine("sqlite+aiosqlite:///:memory:"))
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def mock_store():
    """
    A ProductStore double that answers ping() and holds no products.

    Usage:
        mock_store.find_by_id.return_value = product
        result = await ProductService(mock_store).get_product(str(product.id))
    """
    store = AsyncMock(spec=ProductStore)
    store.ping.return_value = True
    store.find_many.return_value = []
    return store


@pytest.fixture
def failing_store():
    """A ProductStore double simulating a database that is down."""
    store = AsyncMock(spec=ProductStore)
    down = ConnectionRefusedError("connection refused")
    store.ping.return_value = False
    store.insert_one.side_effect = down
    store.find_many.side_effect = down
    store.find_by_id.side_effect = down
    store.find_by_id_and_update.side_effect = down
    store.find_by_id_and_delete.side_effect = down
    return store


@pytest.fixture
def laptop_payload():
    return {"name": "Laptop", "price": 1200, "category": "Electronics"}


@pytest.fixture
def make_client():
    """
    Factory for HTTPX clients around an app built on the given store.

    ASGITransport does not run the lifespan, so stores passed in must
    already be connected (or be doubles).

    Usage:
        async with make_client(failing_store, sample_fallback_enabled=False) as client:
            response = await client.get("/products")
    """

    @asynccontextmanager
    async def _make(store: ProductStore, config: Optional[Settings] = None, **overrides):
        config = config or Settings(**overrides)
        app = create_app(config=config, store=store)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _make


@pytest_asyncio.fixture
async def test_client(sql_store, make_client):
    """HTTPX client for an app serving from a real, empty SQLite store."""
    async with make_client(sql_store) as client:
        yield client
