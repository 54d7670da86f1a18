# tests/conftest.py
import os

# Point the app at SQLite before anything imports sendr.database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient

from sendr.core.config import Settings
from sendr.database import build_engine, build_sessionmaker, create_tables
from sendr.dependencies import get_store
from sendr.main import app
from sendr.store import DocumentStore


@pytest.fixture(scope="session")
def settings():
    """Provide test settings"""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ORDER_TXN_MAX_ATTEMPTS=5,
        ORDER_TXN_RETRY_BACKOFF_MS=0,
    )


@pytest.fixture
async def test_engine(tmp_path):
    """
    File-backed SQLite engine, one database per test.

    A file (rather than :memory:) lets separate sessions use separate
    connections, which the concurrency tests rely on.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'sendr_test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_sessionmaker(test_engine)


@pytest.fixture
def store(session_factory, settings):
    return DocumentStore(
        session_factory,
        max_attempts=settings.ORDER_TXN_MAX_ATTEMPTS,
        backoff_ms=settings.ORDER_TXN_RETRY_BACKOFF_MS,
    )


@pytest.fixture
async def seeded_store(store):
    """
    Two shops:
      s1: p1 (qty 5, 10.0), p2 (qty 3, 25.0), p_out (qty 0, hidden)
      s2: p3 (qty 10, 7.5)
    """
    await store.create_document("shops", {
        "id": "s1", "name": "Bala's Fresh Mart", "vendor_uid": "v1",
        "latitude": 12.9716, "longitude": 77.5946,
    })
    await store.create_document("shops", {
        "id": "s2", "name": "Corner Dairy", "vendor_uid": "v2",
        "latitude": 13.0827, "longitude": 80.2707,
    })
    await store.create_document("vendors", {"id": "v1", "email": "bala@example.com", "shop_id": "s1"})
    await store.create_document("vendors", {"id": "v2", "email": "dairy@example.com", "shop_id": "s2"})
    await store.create_document("products", {
        "id": "p1", "shop_id": "s1", "name": "Fresh Tomatoes - 1 kg", "category": "fruits-veg",
        "price": 10.0, "quantity": 5, "available": True,
    })
    await store.create_document("products", {
        "id": "p2", "shop_id": "s1", "name": "Brown Bread", "category": "dairy-bakery",
        "price": 25.0, "quantity": 3, "available": True,
    })
    await store.create_document("products", {
        "id": "p_out", "shop_id": "s1", "name": "Paneer 200 g",
        "price": 90.0, "quantity": 0, "available": False,
    })
    await store.create_document("products", {
        "id": "p3", "shop_id": "s2", "name": "Amul Milk 500 ml", "category": "dairy-bakery",
        "price": 7.5, "quantity": 10, "available": True,
    })
    return store


@pytest.fixture
async def test_client(seeded_store):
    """HTTP client against the app with the store swapped for the test database"""
    app.dependency_overrides[get_store] = lambda: seeded_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
