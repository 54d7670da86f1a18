"""
Document store over the relational database.

Presents the SQLAlchemy models as key-addressed document collections with
optimistic multi-document transactions:

- point reads, partial-merge writes, inserts with generated ids, deletes
- `run_transaction(body)` runs `body(txn)` inside one database transaction and
  re-executes it from scratch when a concurrent writer got there first
- `server_timestamp()` marks a field to be filled with the database clock

Conflict detection relies on each model's version_id_col: every UPDATE and
DELETE carries `AND version = :seen`, so a row changed since it was read makes
the flush raise StaleDataError. Serialization failures, deadlocks and SQLite
lock contention are treated the same way.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from sendr.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from sendr.core.utils import new_document_id
from sendr.models import Order, Product, Shop, Vendor

logger = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTIONS = {
    "shops": Shop,
    "vendors": Vendor,
    "products": Product,
    "orders": Order,
}

# SQLSTATE codes for serialization_failure and deadlock_detected
RETRYABLE_SQLSTATES = {"40001", "40P01"}


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def server_timestamp() -> _ServerTimestamp:
    """Marker resolved to the database's clock when the write is flushed."""
    return SERVER_TIMESTAMP


def _model_for(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise InvalidArgumentError(f"unknown collection '{collection}'")


def _prepare_fields(model, collection: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    known = set(model.field_names()) - {"version"}
    unknown = set(fields) - known
    if unknown:
        raise InvalidArgumentError(
            f"unknown field(s) for {collection}: {', '.join(sorted(unknown))}"
        )
    return {
        key: (func.now() if value is SERVER_TIMESTAMP else value)
        for key, value in fields.items()
    }


def _is_contention(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in RETRYABLE_SQLSTATES:
        return True
    return isinstance(exc, OperationalError) and "database is locked" in str(orig)


class Transaction:
    """Handle passed to a transaction body. All writes commit together."""

    def __init__(self, session: AsyncSession):
        self._session = session
        # The identity map only holds clean objects weakly. Pinning them keeps
        # the version seen by the first read as the one checked at flush.
        self._loaded: Dict[Tuple[type, str], Any] = {}

    async def _load(self, model, doc_id: str):
        # Staged writes are flushed first so reads observe them.
        if self._session.dirty or self._session.new:
            await self._session.flush()
        key = (model, doc_id)
        obj = self._loaded.get(key)
        if obj is None:
            obj = await self._session.get(model, doc_id)
            if obj is None:
                return None
            self._loaded[key] = obj
        expired = inspect(obj).expired_attributes
        if expired:
            # Only server-filled values; a full refresh would pick up a newer version.
            await self._session.refresh(obj, attribute_names=list(expired))
        return obj

    async def read_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        model = _model_for(collection)
        if not doc_id:
            return None
        obj = await self._load(model, doc_id)
        return obj.to_document() if obj is not None else None

    async def write_document(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        model = _model_for(collection)
        values = _prepare_fields(model, collection, fields)
        values.pop("id", None)
        obj = await self._load(model, doc_id)
        if obj is None:
            raise NotFoundError(f"{collection} {doc_id} not found")
        for key, value in values.items():
            setattr(obj, key, value)

    async def create_document(self, collection: str, fields: Dict[str, Any]) -> str:
        model = _model_for(collection)
        values = _prepare_fields(model, collection, fields)
        doc_id = values.get("id") or new_document_id()
        values["id"] = doc_id
        obj = model(**values)
        self._session.add(obj)
        self._loaded[(model, doc_id)] = obj
        return doc_id

    async def delete_document(self, collection: str, doc_id: str) -> None:
        model = _model_for(collection)
        obj = await self._load(model, doc_id)
        if obj is None:
            raise NotFoundError(f"{collection} {doc_id} not found")
        await self._session.delete(obj)
        await self._session.flush()
        self._loaded.pop((model, doc_id), None)


class DocumentStore:
    """
    Entry point for reads, writes and transactions.

    Args:
        session_factory: async_sessionmaker bound to the engine
        max_attempts: default attempt budget for run_transaction
        backoff_ms: delay before the first retry, doubled after each attempt
    """

    def __init__(self, session_factory: async_sessionmaker, max_attempts: int = 5, backoff_ms: int = 50):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._session_factory = session_factory
        self.max_attempts = max_attempts
        self.backoff_ms = backoff_ms

    async def run_transaction(
        self,
        body: Callable[[Transaction], Awaitable[T]],
        max_attempts: Optional[int] = None,
    ) -> T:
        """
        Run `body` atomically, retrying the whole body on write conflicts.

        Errors raised by the body propagate unchanged and nothing is
        committed. Raises ConflictError once the attempt budget is spent and
        StoreUnavailableError for any other database failure.
        """
        attempts = self.max_attempts if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        last_conflict: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        result = await body(Transaction(session))
                return result
            except StaleDataError as exc:
                last_conflict = exc
            except IntegrityError as exc:
                raise ConflictError(f"write rejected by the database: {exc.orig}") from exc
            except DBAPIError as exc:
                if not _is_contention(exc):
                    raise StoreUnavailableError(f"database error: {exc.orig}") from exc
                last_conflict = exc
            except (OSError, PoolTimeoutError) as exc:
                raise StoreUnavailableError(f"database unreachable: {exc}") from exc

            logger.warning(
                "Transaction conflict on attempt %s/%s: %s", attempt, attempts, last_conflict
            )
            if attempt < attempts and self.backoff_ms > 0:
                await asyncio.sleep(self.backoff_ms * (2 ** (attempt - 1)) / 1000)

        raise ConflictError(
            f"transaction aborted after {attempts} attempts due to concurrent updates"
        ) from last_conflict

    # One-shot operations, each its own transaction

    async def read_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        return await self.run_transaction(lambda txn: txn.read_document(collection, doc_id))

    async def write_document(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        await self.run_transaction(lambda txn: txn.write_document(collection, doc_id, fields))

    async def create_document(self, collection: str, fields: Dict[str, Any]) -> str:
        return await self.run_transaction(lambda txn: txn.create_document(collection, fields))

    async def delete_document(self, collection: str, doc_id: str) -> None:
        await self.run_transaction(lambda txn: txn.delete_document(collection, doc_id))

    # Queries

    def _filtered(self, collection: str, filters: Optional[Dict[str, Any]], statement=None):
        model = _model_for(collection)
        stmt = statement if statement is not None else select(model)
        for key, value in (filters or {}).items():
            column = getattr(model, key, None)
            if column is None or key not in model.field_names():
                raise InvalidArgumentError(f"unknown field for {collection}: {key}")
            stmt = stmt.where(column == value)
        return model, stmt

    async def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Equality-filtered listing of a collection as plain dicts."""
        model, stmt = self._filtered(collection, filters)
        if order_by:
            if order_by not in model.field_names():
                raise InvalidArgumentError(f"unknown field for {collection}: {order_by}")
            column = getattr(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc(), model.id)
        if limit:
            stmt = stmt.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [obj.to_document() for obj in result.scalars().all()]
        except DBAPIError as exc:
            raise StoreUnavailableError(f"database error: {exc.orig}") from exc
        except (OSError, PoolTimeoutError) as exc:
            raise StoreUnavailableError(f"database unreachable: {exc}") from exc

    async def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        model = _model_for(collection)
        _, stmt = self._filtered(collection, filters, select(func.count()).select_from(model))
        try:
            async with self._session_factory() as session:
                return int(await session.scalar(stmt) or 0)
        except DBAPIError as exc:
            raise StoreUnavailableError(f"database error: {exc.orig}") from exc
        except (OSError, PoolTimeoutError) as exc:
            raise StoreUnavailableError(f"database unreachable: {exc}") from exc

    async def get_many(self, collection: str, doc_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Documents keyed by id; ids that do not exist are left out."""
        model = _model_for(collection)
        ids = list({doc_id for doc_id in doc_ids if doc_id})
        if not ids:
            return {}
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(model).where(model.id.in_(ids)))
                return {obj.id: obj.to_document() for obj in result.scalars().all()}
        except DBAPIError as exc:
            raise StoreUnavailableError(f"database error: {exc.orig}") from exc
        except (OSError, PoolTimeoutError) as exc:
            raise StoreUnavailableError(f"database unreachable: {exc}") from exc

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (DBAPIError, OSError, PoolTimeoutError) as exc:
            raise StoreUnavailableError(f"database unreachable: {exc}") from exc
