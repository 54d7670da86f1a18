"""
Vendor routes: registration, dashboard, catalogue management and order
status updates.

Every route acts on the signed-in vendor's own shop; products and orders of
other shops answer 404.
"""
import logging

from fastapi import APIRouter, Depends, Response

from sendr.dependencies import get_store, get_vendor_uid
from sendr.schemas.order import OrderRead, OrderStatusUpdate
from sendr.schemas.product import AvailabilityUpdate, ProductCreate, ProductRead, ProductUpdate, QuantityAdjust
from sendr.schemas.vendor import RegistrationResult, VendorDashboard, VendorRegister
from sendr.services.order_service import OrderService
from sendr.services.product_service import ProductService
from sendr.services.vendor_service import VendorService
from sendr.store import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendor", tags=["vendor"])


async def get_vendor_shop_id(
    vendor_uid: str = Depends(get_vendor_uid),
    store: DocumentStore = Depends(get_store),
) -> str:
    return await VendorService(store).get_vendor_shop_id(vendor_uid)


@router.post("/register", response_model=RegistrationResult, status_code=201)
async def register(
    registration: VendorRegister,
    vendor_uid: str = Depends(get_vendor_uid),
    store: DocumentStore = Depends(get_store),
):
    return await VendorService(store).register_vendor(vendor_uid, registration)


@router.get("/dashboard", response_model=VendorDashboard)
async def dashboard(
    vendor_uid: str = Depends(get_vendor_uid),
    store: DocumentStore = Depends(get_store),
):
    return await VendorService(store).get_dashboard(vendor_uid)


@router.post("/products", response_model=ProductRead, status_code=201)
async def add_product(
    product: ProductCreate,
    vendor_uid: str = Depends(get_vendor_uid),
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    return await ProductService(store).add_product(shop_id, product, vendor_uid=vendor_uid)


@router.patch("/products/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    product: ProductUpdate,
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    return await ProductService(store).update_product(product_id, product, shop_id=shop_id)


@router.delete("/products/{product_id}", status_code=204)
async def delete_product(
    product_id: str,
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    await ProductService(store).delete_product(product_id, shop_id=shop_id)
    return Response(status_code=204)


@router.post("/products/{product_id}/adjust")
async def adjust_quantity(
    product_id: str,
    adjustment: QuantityAdjust,
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    """Add or remove stock, e.g. {"delta": -1} for one unit sold over the counter."""
    quantity = await ProductService(store).adjust_quantity(product_id, adjustment.delta, shop_id=shop_id)
    return {"product_id": product_id, "quantity": quantity}


@router.post("/products/{product_id}/availability", response_model=ProductRead)
async def set_availability(
    product_id: str,
    update: AvailabilityUpdate,
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    return await ProductService(store).set_availability(product_id, update.available, shop_id=shop_id)


@router.patch("/orders/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    shop_id: str = Depends(get_vendor_shop_id),
    store: DocumentStore = Depends(get_store),
):
    return await OrderService(store).update_order_status(order_id, update.status, shop_id=shop_id)
