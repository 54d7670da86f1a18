class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

class InvalidArgumentError(BaseServiceError):
    """Raised when caller input is malformed. Nothing has been written."""
    kind = "invalid_argument"

class NotFoundError(BaseServiceError):
    """Raised when a referenced document does not exist."""
    kind = "not_found"

class InsufficientStockError(BaseServiceError):
    """Raised when a requested quantity exceeds the available stock."""
    kind = "insufficient_stock"

class ConflictError(BaseServiceError):
    """Raised when a write collides with existing state or concurrent writers
    exhaust the transaction retry budget."""
    kind = "conflict"

class StoreUnavailableError(BaseServiceError):
    """Raised when the database cannot be reached or fails outright."""
    kind = "store_unavailable"
