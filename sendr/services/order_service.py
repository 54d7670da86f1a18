"""
Order Service

Places orders against live stock and manages them afterwards.

place_order is all-or-nothing: every product is read, checked and
decremented and the order document is created inside one store
transaction. If any product is missing, belongs to another shop or is short
on stock, nothing is written. Concurrent placements touching the same
product are serialized by the store's version check; the loser's body is
re-run with fresh reads, so stock can never be oversold.

Quantities for a product that appears more than once in a request are summed
before the stock check; the order still records one line item per request
entry, in request order.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from sendr.core.enums import OrderStatus, ORDER_STATUS_FLOW
from sendr.core.exceptions import (
    BaseServiceError,
    InsufficientStockError,
    InvalidArgumentError,
    NotFoundError,
)
from sendr.schemas.order import OrderRead
from sendr.store import DocumentStore, Transaction, server_timestamp

logger = logging.getLogger(__name__)


def _item_fields(item: Any) -> Tuple[Any, Any]:
    """Pull (product_id, qty) out of a request item dict or schema."""
    if isinstance(item, BaseModel):
        item = item.model_dump()
    if not isinstance(item, Mapping):
        raise InvalidArgumentError("productId missing")
    product_id = item.get("product_id", item.get("productId"))
    return product_id, item.get("qty")


def _parse_qty(raw: Any, product_id: str) -> int:
    """Positive whole numbers only; numeric strings and integral floats are accepted."""
    value = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())

    if value is None or value <= 0:
        raise InvalidArgumentError(f"invalid qty for product {product_id}")
    return value


def validate_order_request(shop_id: Any, items: Any) -> List[Tuple[str, int]]:
    """
    Check caller input before the store is touched.

    Returns:
        The request as (product_id, qty) pairs in request order.

    Raises:
        InvalidArgumentError: missing shop id, empty items, an item without a
            product id, or a qty that is not a positive integer.
    """
    if not isinstance(shop_id, str) or not shop_id.strip():
        raise InvalidArgumentError("shopId is required")
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)) or len(items) == 0:
        raise InvalidArgumentError("items required")

    normalized = []
    for item in items:
        product_id, raw_qty = _item_fields(item)
        if not isinstance(product_id, str) or not product_id.strip():
            raise InvalidArgumentError("productId missing")
        product_id = product_id.strip()
        normalized.append((product_id, _parse_qty(raw_qty, product_id)))
    return normalized


class OrderService:
    """Order placement plus the vendor-side order listing and status flow."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def place_order(
        self,
        shop_id: str,
        items: Sequence[Any],
        customer_uid: Optional[str] = None,
    ) -> str:
        """
        Atomically decrement stock for every item and record the order.

        Args:
            shop_id: Shop the whole order belongs to
            items: Sequence of {product_id, qty} dicts or OrderItemIn schemas
            customer_uid: Optional id of the ordering customer

        Returns:
            The new order id

        Raises:
            InvalidArgumentError: Malformed input, or a product from another shop
            NotFoundError: A product does not exist
            InsufficientStockError: A product has less stock than requested
            ConflictError: Concurrent updates exhausted the retry budget
            StoreUnavailableError: The database failed
        """
        line_requests = validate_order_request(shop_id, items)
        shop_id = shop_id.strip()

        requested: Dict[str, int] = {}
        for product_id, qty in line_requests:
            requested[product_id] = requested.get(product_id, 0) + qty

        async def _place(txn: Transaction) -> str:
            # Everything here is recomputed on each attempt.
            products = {}
            for product_id, wanted in requested.items():
                product = await txn.read_document("products", product_id)
                if product is None:
                    raise NotFoundError(f"product {product_id} not found")
                if product.get("shop_id") != shop_id:
                    raise InvalidArgumentError(
                        f"product {product_id} does not belong to shop {shop_id}"
                    )
                if int(product.get("quantity") or 0) < wanted:
                    raise InsufficientStockError(
                        f"not enough stock for product {product.get('name') or product_id}"
                    )
                products[product_id] = product

            for product_id, wanted in requested.items():
                new_quantity = int(products[product_id].get("quantity") or 0) - wanted
                await txn.write_document("products", product_id, {
                    "quantity": new_quantity,
                    "available": new_quantity > 0,
                    "updated_at": server_timestamp(),
                })

            total = 0.0
            order_items = []
            for product_id, qty in line_requests:
                product = products[product_id]
                unit_price = float(product.get("price") or 0)
                total += unit_price * qty
                order_items.append({
                    "product_id": product_id,
                    "name": product.get("name") or None,
                    "qty": qty,
                    "price": unit_price,
                })

            return await txn.create_document("orders", {
                "customer_uid": customer_uid or None,
                "shop_id": shop_id,
                "items": order_items,
                "total": total,
                "status": OrderStatus.PLACED.value,
                "created_at": server_timestamp(),
            })

        try:
            order_id = await self.store.run_transaction(_place)
        except BaseServiceError as exc:
            logger.info("Order for shop %s rejected (%s): %s", shop_id, exc.kind, exc)
            raise

        logger.info(
            "Placed order %s for shop %s: %s line item(s), %s unit(s)",
            order_id, shop_id, len(line_requests), sum(requested.values()),
        )
        return order_id

    async def get_order(self, order_id: str) -> OrderRead:
        order = await self.store.read_document("orders", order_id)
        if order is None:
            raise NotFoundError(f"order {order_id} not found")
        return OrderRead.from_document(order)

    async def list_orders_for_shop(self, shop_id: str) -> List[OrderRead]:
        """Orders for a shop, newest first."""
        if not shop_id:
            return []
        orders = await self.store.query(
            "orders", {"shop_id": shop_id}, order_by="created_at", descending=True
        )
        return [OrderRead.from_document(order) for order in orders]

    async def count_orders_for_shop(self, shop_id: str) -> int:
        if not shop_id:
            return 0
        return await self.store.count("orders", {"shop_id": shop_id})

    async def update_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        shop_id: Optional[str] = None,
    ) -> OrderRead:
        """
        Move an order along placed → accepted → packed → out_for_delivery →
        delivered, or cancel it. Delivered and cancelled orders are final.

        When shop_id is given, orders of other shops are reported as not found.
        """
        new_status = OrderStatus(status)

        async def _update(txn: Transaction) -> Dict[str, Any]:
            order = await txn.read_document("orders", order_id)
            if order is None or (shop_id and order.get("shop_id") != shop_id):
                raise NotFoundError(f"order {order_id} not found")

            current = OrderStatus(order["status"])
            if current.is_terminal:
                raise InvalidArgumentError(f"order {order_id} is already {current.value}")
            if new_status != OrderStatus.CANCELLED and (
                ORDER_STATUS_FLOW.index(new_status) <= ORDER_STATUS_FLOW.index(current)
            ):
                raise InvalidArgumentError(
                    f"cannot move order {order_id} from {current.value} to {new_status.value}"
                )

            await txn.write_document("orders", order_id, {
                "status": new_status.value,
                "updated_at": server_timestamp(),
            })
            return await txn.read_document("orders", order_id)

        order = await self.store.run_transaction(_update)
        logger.info("Order %s moved to %s", order_id, new_status.value)
        return OrderRead.from_document(order)
