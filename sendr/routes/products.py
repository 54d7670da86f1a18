from typing import List

from fastapi import APIRouter, Depends

from sendr.dependencies import get_store
from sendr.schemas.product import ProductRead
from sendr.services.product_service import ProductService
from sendr.store import DocumentStore

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductRead])
async def list_products(store: DocumentStore = Depends(get_store)):
    """Every product across shops, most recently updated first."""
    return await ProductService(store).list_products()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, store: DocumentStore = Depends(get_store)):
    return await ProductService(store).get_product(product_id)
