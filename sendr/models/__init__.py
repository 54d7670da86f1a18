from .shop import Shop
from .vendor import Vendor
from .product import Product
from .order import Order

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Shop',
    'Vendor',
    'Product',
    'Order',
]
