"""
Core module exports.
"""
from .enums import (
    OrderStatus,
    Category,
)

from .exceptions import (
    BaseServiceError,
    InvalidArgumentError,
    NotFoundError,
    InsufficientStockError,
    ConflictError,
    StoreUnavailableError,
)

from .utils import (
    haversine_km,
    new_document_id,
)
