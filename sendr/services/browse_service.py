"""
Customer-facing product browsing.

Joins every product with its shop, works out how far the shop is from the
customer, and applies the storefront's category, search and radius filters.
Products are matched to a category by id first and by name keywords second,
since many vendor-entered products carry no category at all.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sendr.core.enums import Category, CATEGORY_KEYWORDS
from sendr.core.utils import haversine_km
from sendr.schemas.browse import BrowseItem, Location
from sendr.store import DocumentStore

logger = logging.getLogger(__name__)


def matches_category(product: Dict[str, Any], category: Optional[str]) -> bool:
    if not category:
        return True
    if (product.get("category") or "").lower() == category.lower():
        return True
    try:
        keywords = CATEGORY_KEYWORDS[Category(category.lower())]
    except ValueError:
        return False
    name = (product.get("name") or "").lower()
    return any(keyword in name for keyword in keywords)


def matches_search(product: Dict[str, Any], shop: Optional[Dict[str, Any]], search: str) -> bool:
    term = (search or "").strip().lower()
    if not term:
        return True
    product_name = (product.get("name") or "").lower()
    shop_name = ((shop or {}).get("name") or "").lower()
    return term in product_name or term in shop_name


def distance_to_shop(shop: Optional[Dict[str, Any]], location: Optional[Location]) -> Optional[float]:
    """Kilometres from the customer to the shop, or None when either position is unknown."""
    if location is None or not shop:
        return None
    if shop.get("latitude") is None or shop.get("longitude") is None:
        return None
    return haversine_km(location.lat, location.lng, shop["latitude"], shop["longitude"])


def filter_products(
    products: Iterable[Dict[str, Any]],
    shops: Dict[str, Dict[str, Any]],
    category: Optional[str] = None,
    search: str = "",
    location: Optional[Location] = None,
    radius_km: Optional[float] = None,
) -> List[BrowseItem]:
    results = []
    for product in products:
        shop = shops.get(product.get("shop_id"))
        if not matches_category(product, category):
            continue
        if not matches_search(product, shop, search):
            continue

        distance = distance_to_shop(shop, location)
        if location is not None and radius_km is not None:
            if distance is None or distance > radius_km:
                continue

        results.append(BrowseItem.model_validate({**product, "shop": shop, "distance_km": distance}))

    if location is not None:
        results.sort(key=lambda item: (item.distance_km is None, item.distance_km or 0.0, item.name.lower()))
    else:
        results.sort(key=lambda item: item.name.lower())
    return results


class BrowseService:
    def __init__(self, store: DocumentStore, default_radius_km: float = 5.0):
        self.store = store
        self.default_radius_km = default_radius_km

    async def browse(
        self,
        category: Optional[str] = None,
        search: str = "",
        location: Optional[Location] = None,
        radius_km: Optional[float] = None,
    ) -> List[BrowseItem]:
        """
        Products matching the filters, nearest first when the customer's
        location is known and alphabetical otherwise.
        """
        if radius_km is None:
            radius_km = self.default_radius_km

        products = await self.store.query("products")
        shops = await self.store.get_many("shops", (p.get("shop_id") for p in products))

        items = filter_products(products, shops, category, search, location, radius_km)
        logger.debug(
            "Browse category=%s search=%r location=%s radius=%s -> %s of %s products",
            category, search, location, radius_km, len(items), len(products),
        )
        return items
