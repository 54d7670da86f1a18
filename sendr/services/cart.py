"""
Client-held shopping cart.

The cart is a convenience for the storefront, not a source of truth: prices
and quantities are whatever the client saw and are never trusted. Checkout
turns it into a place-order request and the order service re-reads stock and
prices. A cart only ever holds products from one shop.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

from sendr.core.exceptions import InvalidArgumentError
from sendr.schemas.product import ProductRead

STORAGE_KEY = "sendr_cart_v1"


class CartItem(BaseModel):
    product_id: str
    name: str = "Item"
    price: float = 0.0
    qty: int = 1
    image_url: Optional[str] = None
    shop_id: Optional[str] = None


class CartTotals(BaseModel):
    subtotal: float
    count: int


class Cart(BaseModel):
    items: List[CartItem] = Field(default_factory=list)

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "Cart":
        """Load a stored cart; an empty or unreadable value gives an empty cart."""
        if not raw:
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValueError:
            return cls()

    def to_json(self) -> str:
        return self.model_dump_json()

    @property
    def shop_id(self) -> Optional[str]:
        return self.items[0].shop_id if self.items else None

    def _find(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def add_item(
        self,
        product: Union[ProductRead, Mapping[str, Any]],
        qty: int = 1,
        replace_other_shop: bool = False,
    ) -> List[CartItem]:
        """
        Add `qty` of a product, merging with an existing line for it.

        Raises:
            InvalidArgumentError: The product is from a different shop than the
                cart's and replace_other_shop is not set.
        """
        if isinstance(product, BaseModel):
            product = product.model_dump()
        product_shop = product.get("shop_id")

        if self.items and product_shop != self.shop_id:
            if not replace_other_shop:
                raise InvalidArgumentError(
                    "Your cart has items from another shop; clear it to add this product"
                )
            self.clear()

        existing = self._find(product["id"])
        if existing is not None:
            existing.qty += qty
        else:
            self.items.append(CartItem(
                product_id=product["id"],
                name=product.get("name") or "Item",
                price=float(product.get("price") or 0),
                qty=qty,
                image_url=product.get("image_url"),
                shop_id=product_shop,
            ))
        return self.items

    def update_item_qty(self, product_id: str, qty: int) -> List[CartItem]:
        item = self._find(product_id)
        if item is not None:
            if qty <= 0:
                self.items.remove(item)
            else:
                item.qty = qty
        return self.items

    def remove_item(self, product_id: str) -> List[CartItem]:
        self.items = [item for item in self.items if item.product_id != product_id]
        return self.items

    def clear(self) -> None:
        self.items = []

    def totals(self) -> CartTotals:
        return CartTotals(
            subtotal=sum(item.price * item.qty for item in self.items),
            count=sum(item.qty for item in self.items),
        )

    def to_order_request(self, customer_uid: Optional[str] = None) -> Dict[str, Any]:
        """Checkout payload for the order service. Cart prices are left out."""
        if not self.items:
            raise InvalidArgumentError("items required")
        return {
            "customer_uid": customer_uid,
            "shop_id": self.shop_id,
            "items": [{"product_id": item.product_id, "qty": item.qty} for item in self.items],
        }
