"""Order routes: checkout and order lookup."""
import logging

from fastapi import APIRouter, Depends

from sendr.dependencies import get_store
from sendr.schemas.order import OrderRead, PlaceOrderRequest, PlaceOrderResponse
from sendr.services.order_service import OrderService
from sendr.store import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=PlaceOrderResponse, status_code=201)
async def place_order(request: PlaceOrderRequest, store: DocumentStore = Depends(get_store)):
    """
    Place an order for one shop. Stock is decremented and the order recorded
    atomically; on any error nothing is written.
    """
    order_id = await OrderService(store).place_order(
        shop_id=request.shop_id,
        items=request.items,
        customer_uid=request.customer_uid,
    )
    return PlaceOrderResponse(order_id=order_id)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: str, store: DocumentStore = Depends(get_store)):
    return await OrderService(store).get_order(order_id)
