# sendr/services/shop_service.py

import logging
from typing import List

from sendr.core.exceptions import NotFoundError
from sendr.schemas.shop import ShopCreate, ShopRead
from sendr.store import DocumentStore, server_timestamp

logger = logging.getLogger(__name__)


class ShopService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_shops(self) -> List[ShopRead]:
        """All shops, newest first."""
        shops = await self.store.query("shops", order_by="created_at", descending=True)
        return [ShopRead.from_document(shop) for shop in shops]

    async def get_shop(self, shop_id: str) -> ShopRead:
        shop = await self.store.read_document("shops", shop_id)
        if shop is None:
            raise NotFoundError(f"shop {shop_id} not found")
        return ShopRead.from_document(shop)

    async def add_shop(self, shop_data: ShopCreate) -> str:
        shop_id = await self.store.create_document("shops", {
            **shop_data.model_dump(),
            "created_at": server_timestamp(),
        })
        logger.info("Created shop %s (%s)", shop_id, shop_data.name)
        return shop_id
