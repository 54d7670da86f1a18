"""
Schemas for vendor registration and the vendor dashboard.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from .base import BaseSchema
from .product import ProductRead
from .shop import ShopRead


class VendorRegister(BaseSchema):
    email: Optional[str] = None
    shop_name: Optional[str] = Field(None, alias="shopName")
    name: str = ""
    phone: str = ""
    address: str = ""
    pincode: str = ""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class VendorRead(BaseSchema):
    uid: str = Field(..., validation_alias="id")
    email: str
    phone: str = ""
    name: str = ""
    shop_id: Optional[str] = None
    created_at: Optional[datetime] = None


class RegistrationResult(BaseSchema):
    vendor_uid: str
    shop_id: str


class VendorDashboard(BaseSchema):
    vendor: VendorRead
    shop: Optional[ShopRead] = None
    products: List[ProductRead] = Field(default_factory=list)
    orders_count: int = 0
