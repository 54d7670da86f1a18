# sendr/models/shop.py

from sqlalchemy import Column, Integer, String, Float, TIMESTAMP, func

from ..database import Base
from .base import DocumentMixin


class Shop(DocumentMixin, Base):
    """A vendor's storefront. Location is optional; shops without one never
    show up in radius-filtered browsing."""

    __tablename__ = "shops"

    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    vendor_uid = Column(String(128), index=True, nullable=True)
    address = Column(String, nullable=False, default="")
    pincode = Column(String(16), nullable=False, default="")
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False, index=True)

    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Shop id={self.id} name={self.name!r}>"
