from typing import Optional
from fastapi import Header, HTTPException

from sendr.core.config import get_settings
from sendr.database import async_session
from sendr.store import DocumentStore


_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    """Dependency returning the process-wide document store."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = DocumentStore(
            async_session,
            max_attempts=settings.ORDER_TXN_MAX_ATTEMPTS,
            backoff_ms=settings.ORDER_TXN_RETRY_BACKOFF_MS,
        )
    return _store


async def get_vendor_uid(x_vendor_uid: Optional[str] = Header(None)) -> str:
    """
    Vendor identity for dashboard routes.

    Sign-in happens upstream; the gateway forwards the authenticated uid in
    the X-Vendor-Uid header.
    """
    if not x_vendor_uid or not x_vendor_uid.strip():
        raise HTTPException(status_code=401, detail="Vendor sign-in required")
    return x_vendor_uid.strip()
