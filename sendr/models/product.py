"""
Product model: one sellable item at one shop.

`quantity` is the stock level and never goes negative; `available` is forced
false by every write path when quantity reaches zero.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, TIMESTAMP, CheckConstraint, func

from ..database import Base
from .base import DocumentMixin


class Product(DocumentMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    id = Column(String(64), primary_key=True)
    shop_id = Column(String(64), index=True, nullable=False)
    vendor_uid = Column(String(128), nullable=True)

    # Catalogue
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    unit = Column(String(32), nullable=False, default="")  # e.g. "500 ml"
    category = Column(String(32), index=True, nullable=True)
    image_url = Column(String, nullable=True)

    # Pricing and stock
    price = Column(Float, nullable=False, default=0.0)
    quantity = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False, index=True)

    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Product id={self.id} shop={self.shop_id} qty={self.quantity}>"
