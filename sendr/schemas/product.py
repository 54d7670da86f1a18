"""
Schemas for product-related API endpoints.
"""
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .base import BaseSchema


class ProductValidationMixin(BaseSchema):
    """Shared coercion for vendor form input."""

    @field_validator('price', mode='before', check_fields=False)
    @classmethod
    def validate_price(cls, v):
        if v is None or v == '':
            return None
        try:
            return float(v)
        except (ValueError, TypeError):
            raise ValueError('Price must be a valid number')

    @field_validator('quantity', mode='before', check_fields=False)
    @classmethod
    def validate_quantity(cls, v):
        if v is None or v == '':
            return None
        if isinstance(v, bool):
            raise ValueError('Quantity must be a whole number')
        try:
            as_float = float(v)
        except (ValueError, TypeError):
            raise ValueError('Quantity must be a whole number')
        if not as_float.is_integer():
            raise ValueError('Quantity must be a whole number')
        return int(as_float)

    @field_validator('name', 'description', 'unit', 'image_url', mode='before', check_fields=False)
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProductCreate(ProductValidationMixin):
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    description: str = ""
    unit: str = ""
    category: Optional[str] = None
    quantity: Optional[int] = Field(0, ge=0)
    available: bool = True
    image_url: Optional[str] = None


class ProductUpdate(ProductValidationMixin):
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    available: Optional[bool] = None
    image_url: Optional[str] = None


class ProductRead(BaseSchema):
    id: str
    shop_id: str
    vendor_uid: Optional[str] = None
    name: str
    description: str = ""
    unit: str = ""
    category: Optional[str] = None
    image_url: Optional[str] = None
    price: float
    quantity: int
    available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0 and self.available


class QuantityAdjust(BaseSchema):
    delta: int


class AvailabilityUpdate(BaseSchema):
    available: bool
