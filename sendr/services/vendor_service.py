"""
Vendor onboarding and the vendor dashboard.

Registration writes the shop and the vendor profile together: a vendor never
exists without its shop, and the shop records the vendor's uid.
"""

import logging
from typing import Optional

from sendr.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from sendr.schemas.shop import ShopRead
from sendr.schemas.product import ProductRead
from sendr.schemas.vendor import RegistrationResult, VendorDashboard, VendorRead, VendorRegister
from sendr.store import DocumentStore, Transaction, server_timestamp

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class VendorService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def register_vendor(self, uid: str, registration: VendorRegister) -> RegistrationResult:
        """
        Create the vendor's shop and profile in one transaction.

        Raises:
            InvalidArgumentError: uid, email or shop name missing
            ConflictError: A vendor with this uid already exists
        """
        uid = _clean(uid)
        email = _clean(registration.email)
        shop_name = _clean(registration.shop_name)
        if not uid or not email or not shop_name:
            raise InvalidArgumentError("Fill required fields")

        async def _register(txn: Transaction) -> RegistrationResult:
            if await txn.read_document("vendors", uid) is not None:
                raise ConflictError(f"vendor {uid} is already registered")

            shop_id = await txn.create_document("shops", {
                "name": shop_name,
                "vendor_uid": uid,
                "address": _clean(registration.address),
                "pincode": _clean(registration.pincode),
                "latitude": registration.latitude,
                "longitude": registration.longitude,
                "created_at": server_timestamp(),
            })
            await txn.create_document("vendors", {
                "id": uid,
                "email": email,
                "phone": _clean(registration.phone),
                "name": _clean(registration.name),
                "shop_id": shop_id,
                "created_at": server_timestamp(),
            })
            return RegistrationResult(vendor_uid=uid, shop_id=shop_id)

        result = await self.store.run_transaction(_register)
        logger.info("Registered vendor %s with shop %s", uid, result.shop_id)
        return result

    async def get_vendor(self, uid: str) -> VendorRead:
        vendor = await self.store.read_document("vendors", uid)
        if vendor is None:
            raise NotFoundError(f"vendor {uid} not found")
        return VendorRead.from_document(vendor)

    async def get_vendor_shop_id(self, uid: str) -> str:
        """The shop a vendor manages; a vendor without one cannot manage products."""
        vendor = await self.get_vendor(uid)
        if not vendor.shop_id:
            raise NotFoundError(f"vendor {uid} has no shop")
        return vendor.shop_id

    async def get_dashboard(self, uid: str) -> VendorDashboard:
        vendor = await self.get_vendor(uid)
        if not vendor.shop_id:
            return VendorDashboard(vendor=vendor)

        shop = await self.store.read_document("shops", vendor.shop_id)
        products = await self.store.query(
            "products", {"shop_id": vendor.shop_id}, order_by="updated_at", descending=True
        )
        orders_count = await self.store.count("orders", {"shop_id": vendor.shop_id})

        return VendorDashboard(
            vendor=vendor,
            shop=ShopRead.from_document(shop) if shop else None,
            products=[ProductRead.from_document(p) for p in products],
            orders_count=orders_count,
        )
