from .base import BaseSchema
from .shop import ShopCreate, ShopRead
from .product import ProductCreate, ProductUpdate, ProductRead, QuantityAdjust, AvailabilityUpdate
from .order import (
    OrderItemIn,
    PlaceOrderRequest,
    PlaceOrderResponse,
    OrderLineItem,
    OrderRead,
    OrderStatusUpdate,
)
from .vendor import VendorRegister, VendorRead, RegistrationResult, VendorDashboard
from .browse import Location, BrowseItem
