"""
Schemas for order placement and order listing.

Request fields accept both snake_case and the storefront client's camelCase
names (productId, shopId, customerUid).
"""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import Field

from sendr.core.enums import OrderStatus
from .base import BaseSchema


class OrderItemIn(BaseSchema):
    # Checked by the order service so malformed input gets its 400 message
    product_id: Any = Field(None, alias="productId")
    qty: Any = None


class PlaceOrderRequest(BaseSchema):
    customer_uid: Optional[str] = Field(None, alias="customerUid")
    shop_id: Any = Field(None, alias="shopId")
    # Raw list of item objects; the order service validates each one
    items: Any = Field(default_factory=list)


class PlaceOrderResponse(BaseSchema):
    order_id: str


class OrderLineItem(BaseSchema):
    product_id: str
    name: Optional[str] = None
    qty: int
    price: float


class OrderRead(BaseSchema):
    id: str
    customer_uid: Optional[str] = None
    shop_id: str
    items: List[OrderLineItem]
    total: float
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderStatusUpdate(BaseSchema):
    status: OrderStatus
