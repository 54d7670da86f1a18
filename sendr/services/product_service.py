"""
Purpose: The central service for managing the Product entity.

Role: Vendor-side catalogue management plus the read paths the storefront uses.

- Create, update and delete products for a shop
- Atomic stock adjustment (+/- delta, clamped at zero)
- Availability toggling

Every write path keeps the derived rule: a product with zero quantity is
never available. Methods taking `shop_id` treat products of other shops as
missing, which is how vendor routes scope access to their own shop.
"""

import logging
from typing import Any, Dict, List, Optional

from sendr.core.exceptions import InvalidArgumentError, NotFoundError
from sendr.schemas.product import ProductCreate, ProductRead, ProductUpdate
from sendr.store import DocumentStore, Transaction, server_timestamp

logger = logging.getLogger(__name__)


async def _load_product(txn: Transaction, product_id: str, shop_id: Optional[str]) -> Dict[str, Any]:
    product = await txn.read_document("products", product_id)
    if product is None or (shop_id and product.get("shop_id") != shop_id):
        raise NotFoundError(f"product {product_id} not found")
    return product


def _derived_availability(product: Dict[str, Any], old_quantity: int, new_quantity: int) -> bool:
    """Sold out hides a product; restocking from zero shows it again."""
    if new_quantity <= 0:
        return False
    if old_quantity <= 0:
        return True
    return bool(product.get("available", True))


class ProductService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_products(self) -> List[ProductRead]:
        """All products, most recently updated first."""
        products = await self.store.query("products", order_by="updated_at", descending=True)
        return [ProductRead.from_document(p) for p in products]

    async def list_products_for_shop(self, shop_id: str) -> List[ProductRead]:
        if not shop_id:
            return []
        products = await self.store.query(
            "products", {"shop_id": shop_id}, order_by="updated_at", descending=True
        )
        return [ProductRead.from_document(p) for p in products]

    async def get_product(self, product_id: str) -> ProductRead:
        """
        Raises:
            NotFoundError: If product not found
        """
        product = await self.store.read_document("products", product_id)
        if product is None:
            raise NotFoundError(f"product {product_id} not found")
        return ProductRead.from_document(product)

    async def add_product(
        self,
        shop_id: str,
        product_data: ProductCreate,
        vendor_uid: Optional[str] = None,
    ) -> ProductRead:
        """
        Creates a product in a shop.

        Raises:
            InvalidArgumentError: Missing name or price
            NotFoundError: Shop does not exist
        """
        if not product_data.name or product_data.price is None:
            raise InvalidArgumentError("Name and price are required")

        quantity = product_data.quantity or 0
        fields = {
            "shop_id": shop_id,
            "vendor_uid": vendor_uid,
            "name": product_data.name,
            "description": product_data.description or "",
            "unit": product_data.unit or "",
            "category": product_data.category,
            "image_url": product_data.image_url or None,
            "price": product_data.price,
            "quantity": quantity,
            "available": bool(product_data.available) and quantity > 0,
            "created_at": server_timestamp(),
            "updated_at": server_timestamp(),
        }

        async def _create(txn: Transaction):
            if await txn.read_document("shops", shop_id) is None:
                raise NotFoundError(f"shop {shop_id} not found")
            product_id = await txn.create_document("products", fields)
            return await txn.read_document("products", product_id)

        product = await self.store.run_transaction(_create)
        logger.info("Added product %s (%s) to shop %s", product["id"], product["name"], shop_id)
        return ProductRead.from_document(product)

    async def update_product(
        self,
        product_id: str,
        product_data: ProductUpdate,
        shop_id: Optional[str] = None,
    ) -> ProductRead:
        """
        Partial update; fields left unset (or None) are untouched.

        Raises:
            NotFoundError: If product not found
            InvalidArgumentError: Blank name, or availability on a product with no stock
        """
        updates = {
            key: value
            for key, value in product_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "name" in updates and not updates["name"]:
            raise InvalidArgumentError("Name and price are required")

        async def _update(txn: Transaction):
            product = await _load_product(txn, product_id, shop_id)
            values = dict(updates)
            current = int(product.get("quantity") or 0)
            quantity = values.get("quantity", current)

            if "quantity" in values:
                if "available" in values:
                    values["available"] = values["available"] and quantity > 0
                else:
                    values["available"] = _derived_availability(product, current, quantity)
            elif values.get("available") and quantity <= 0:
                raise InvalidArgumentError(f"product {product_id} has no stock and cannot be made available")

            await txn.write_document("products", product_id, {**values, "updated_at": server_timestamp()})
            return await txn.read_document("products", product_id)

        product = await self.store.run_transaction(_update)
        return ProductRead.from_document(product)

    async def delete_product(self, product_id: str, shop_id: Optional[str] = None) -> bool:
        async def _delete(txn: Transaction):
            await _load_product(txn, product_id, shop_id)
            await txn.delete_document("products", product_id)

        await self.store.run_transaction(_delete)
        logger.info("Deleted product %s", product_id)
        return True

    async def adjust_quantity(self, product_id: str, delta: int, shop_id: Optional[str] = None) -> int:
        """
        Atomically add `delta` (may be negative) to the stock level.

        The result is clamped at zero. Reaching zero hides the product;
        restocking a product that was hidden by selling out shows it again.

        Returns:
            The new quantity
        """
        async def _adjust(txn: Transaction) -> int:
            product = await _load_product(txn, product_id, shop_id)
            current = int(product.get("quantity") or 0)
            new_quantity = max(0, current + delta)

            await txn.write_document("products", product_id, {
                "quantity": new_quantity,
                "available": _derived_availability(product, current, new_quantity),
                "updated_at": server_timestamp(),
            })
            return new_quantity

        return await self.store.run_transaction(_adjust)

    async def set_availability(self, product_id: str, available: bool, shop_id: Optional[str] = None) -> ProductRead:
        """Show or hide a product. A product with no stock cannot be shown."""
        return await self.update_product(product_id, ProductUpdate(available=available), shop_id=shop_id)
