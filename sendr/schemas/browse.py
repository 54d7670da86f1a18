from typing import Optional
from pydantic import Field

from .base import BaseSchema
from .product import ProductRead
from .shop import ShopRead


class Location(BaseSchema):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class BrowseItem(ProductRead):
    """A product with its shop and, when known, the distance to the customer."""
    shop: Optional[ShopRead] = None
    distance_km: Optional[float] = None
