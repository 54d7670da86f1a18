"""
Schemas for shop endpoints.
"""
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .base import BaseSchema


class ShopCreate(BaseSchema):
    name: str = Field(..., min_length=1)
    vendor_uid: Optional[str] = None
    address: str = ""
    pincode: str = ""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @field_validator('name', 'address', 'pincode', mode='before')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ShopRead(BaseSchema):
    id: str
    name: str
    vendor_uid: Optional[str] = None
    address: str = ""
    pincode: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[datetime] = None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None
