# tests/unit/store/test_document_store.py
import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm.exc import StaleDataError

from sendr.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from sendr.store import DocumentStore, server_timestamp


async def test_create_read_write_delete(store):
    # Arrange / Act
    shop_id = await store.create_document("shops", {"name": "Corner Store", "created_at": server_timestamp()})
    await store.write_document("shops", shop_id, {"pincode": "560001"})
    shop = await store.read_document("shops", shop_id)

    # Assert
    assert shop["name"] == "Corner Store"
    assert shop["pincode"] == "560001"
    assert shop["created_at"] is not None
    assert "version" not in shop

    await store.delete_document("shops", shop_id)
    assert await store.read_document("shops", shop_id) is None


async def test_unknown_collection_and_field(store):
    with pytest.raises(InvalidArgumentError):
        await store.read_document("carts", "x")
    with pytest.raises(InvalidArgumentError):
        await store.create_document("shops", {"name": "A", "colour": "red"})
    with pytest.raises(InvalidArgumentError):
        await store.query("shops", {"colour": "red"})


async def test_write_missing_document_is_not_found(store):
    with pytest.raises(NotFoundError):
        await store.write_document("shops", "missing", {"name": "X"})


async def test_duplicate_id_is_conflict(store):
    await store.create_document("shops", {"id": "dup", "name": "A"})

    with pytest.raises(ConflictError):
        await store.create_document("shops", {"id": "dup", "name": "B"})


async def test_transaction_reads_its_own_writes(store):
    await store.create_document("shops", {"id": "s1", "name": "A"})

    async def body(txn):
        await txn.write_document("shops", "s1", {"name": "B"})
        return await txn.read_document("shops", "s1")

    shop = await store.run_transaction(body)

    assert shop["name"] == "B"


async def test_body_error_rolls_back_every_write(store):
    await store.create_document("shops", {"id": "s1", "name": "A"})

    async def body(txn):
        await txn.write_document("shops", "s1", {"name": "B"})
        await txn.create_document("shops", {"id": "s2", "name": "C"})
        raise NotFoundError("stop")

    with pytest.raises(NotFoundError):
        await store.run_transaction(body)

    assert (await store.read_document("shops", "s1"))["name"] == "A"
    assert await store.read_document("shops", "s2") is None


async def test_stale_write_is_retried(store):
    attempts = []

    async def body(txn):
        attempts.append(1)
        if len(attempts) < 3:
            raise StaleDataError("version mismatch")
        return "done"

    assert await store.run_transaction(body) == "done"
    assert len(attempts) == 3


async def test_lock_contention_is_retried(store):
    attempts = []

    async def body(txn):
        attempts.append(1)
        if len(attempts) == 1:
            raise OperationalError("UPDATE products", {}, Exception("database is locked"))
        return "done"

    assert await store.run_transaction(body) == "done"
    assert len(attempts) == 2


async def test_other_database_errors_are_unavailable(store):
    async def body(txn):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    with pytest.raises(StoreUnavailableError):
        await store.run_transaction(body)


async def test_retry_budget_and_backoff(session_factory, mocker):
    # Arrange
    sleep = mocker.patch("sendr.store.document_store.asyncio.sleep", new=AsyncMock())
    store = DocumentStore(session_factory, max_attempts=3, backoff_ms=50)
    body = AsyncMock(side_effect=StaleDataError("version mismatch"))

    # Act
    with pytest.raises(ConflictError) as exc_info:
        await store.run_transaction(body)

    # Assert
    assert body.await_count == 3
    assert "3 attempts" in exc_info.value.message
    assert [c.args[0] for c in sleep.await_args_list] == [0.05, 0.1]


def test_max_attempts_must_be_positive(session_factory):
    with pytest.raises(ValueError):
        DocumentStore(session_factory, max_attempts=0)


async def test_query_filters_orders_and_limits(seeded_store):
    products = await seeded_store.query("products", {"shop_id": "s1"}, order_by="price", descending=True, limit=2)

    assert [p["id"] for p in products] == ["p_out", "p2"]
    assert await seeded_store.count("products", {"shop_id": "s2"}) == 1


async def test_get_many_skips_missing(seeded_store):
    shops = await seeded_store.get_many("shops", ["s1", "missing", None, "s1"])

    assert list(shops) == ["s1"]


async def test_ping(store):
    assert await store.ping() is True


async def test_write_after_concurrent_change_is_retried(seeded_store):
    """
    The body reads a row, another session commits a change to it, then the
    body writes. The write must fail the version check and the body re-run,
    so the other session's change is never overwritten.
    """
    seen = []

    async def body(txn):
        product = await txn.read_document("products", "p1")
        seen.append(product["quantity"])
        if len(seen) == 1:
            await seeded_store.write_document("products", "p1", {"quantity": 4})
        await txn.write_document("products", "p1", {"quantity": product["quantity"] - 2})

    await seeded_store.run_transaction(body)

    assert seen == [5, 4]
    assert (await seeded_store.read_document("products", "p1"))["quantity"] == 2


async def test_pool_timeout_is_unavailable(store):
    async def body(txn):
        raise PoolTimeoutError("QueuePool limit reached")

    with pytest.raises(StoreUnavailableError):
        await store.run_transaction(body)


async def test_query_pool_timeout_is_unavailable(store, mocker):
    mocker.patch.object(store, "_session_factory", side_effect=PoolTimeoutError("QueuePool limit reached"))

    with pytest.raises(StoreUnavailableError):
        await store.query("shops")
    with pytest.raises(StoreUnavailableError):
        await store.get_many("shops", ["s1"])


async def test_explicit_zero_attempts_is_rejected(store):
    async def body(txn):
        return "done"

    with pytest.raises(ValueError):
        await store.run_transaction(body, max_attempts=0)
