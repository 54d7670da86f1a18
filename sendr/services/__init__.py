from .order_service import OrderService, validate_order_request
from .product_service import ProductService
from .shop_service import ShopService
from .vendor_service import VendorService
from .browse_service import BrowseService
from .cart import Cart, CartItem, STORAGE_KEY
