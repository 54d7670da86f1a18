"""Shop routes: the shop directory plus each shop's products and orders."""
from typing import List

from fastapi import APIRouter, Depends

from sendr.dependencies import get_store
from sendr.schemas.order import OrderRead
from sendr.schemas.product import ProductRead
from sendr.schemas.shop import ShopCreate, ShopRead
from sendr.services.order_service import OrderService
from sendr.services.product_service import ProductService
from sendr.services.shop_service import ShopService
from sendr.store import DocumentStore

router = APIRouter(prefix="/shops", tags=["shops"])


@router.get("", response_model=List[ShopRead])
async def list_shops(store: DocumentStore = Depends(get_store)):
    return await ShopService(store).list_shops()


@router.post("", response_model=ShopRead, status_code=201)
async def create_shop(shop: ShopCreate, store: DocumentStore = Depends(get_store)):
    service = ShopService(store)
    shop_id = await service.add_shop(shop)
    return await service.get_shop(shop_id)


@router.get("/{shop_id}", response_model=ShopRead)
async def get_shop(shop_id: str, store: DocumentStore = Depends(get_store)):
    return await ShopService(store).get_shop(shop_id)


@router.get("/{shop_id}/products", response_model=List[ProductRead])
async def list_shop_products(shop_id: str, store: DocumentStore = Depends(get_store)):
    await ShopService(store).get_shop(shop_id)
    return await ProductService(store).list_products_for_shop(shop_id)


@router.get("/{shop_id}/orders", response_model=List[OrderRead])
async def list_shop_orders(shop_id: str, store: DocumentStore = Depends(get_store)):
    await ShopService(store).get_shop(shop_id)
    return await OrderService(store).list_orders_for_shop(shop_id)
