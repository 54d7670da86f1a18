# sendr/models/vendor.py

from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from ..database import Base
from .base import DocumentMixin


class Vendor(DocumentMixin, Base):
    """Vendor profile, keyed by the uid issued by the auth provider."""

    __tablename__ = "vendors"

    id = Column(String(128), primary_key=True)  # auth uid
    email = Column(String, nullable=False)
    phone = Column(String(32), nullable=False, default="")
    name = Column(String, nullable=False, default="")
    shop_id = Column(String(64), index=True, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    version = Column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Vendor id={self.id} shop={self.shop_id}>"
