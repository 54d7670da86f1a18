from . import browse, health, orders, products, shops, vendor
