# sendr/models/order.py

from sqlalchemy import Column, Integer, String, Float, TIMESTAMP, func

from ..database import Base
from .base import DocumentMixin, JSONDocument
from sendr.core.enums import OrderStatus


class Order(DocumentMixin, Base):
    """
    A committed purchase.

    `items` is the captured list of {product_id, name, qty, price} line items
    and `total` their sum, both written once at placement.
    """

    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    customer_uid = Column(String(128), index=True, nullable=True)
    shop_id = Column(String(64), index=True, nullable=False)

    items = Column(JSONDocument, nullable=False, default=list)
    total = Column(Float, nullable=False, default=0.0)
    status = Column(String(32), nullable=False, default=OrderStatus.PLACED.value, index=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=True)

    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Order id={self.id} shop={self.shop_id} total={self.total} status={self.status}>"
