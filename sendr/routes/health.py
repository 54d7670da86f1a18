from fastapi import APIRouter, Depends

from sendr.core.exceptions import StoreUnavailableError
from sendr.dependencies import get_store
from sendr.store import COLLECTIONS, DocumentStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "Sendr Storefront"}


@router.get("/health/db")
async def database_health(store: DocumentStore = Depends(get_store)):
    """Check database connectivity"""
    try:
        await store.ping()
        return {
            "status": "healthy",
            "database": "connected",
            "collections": sorted(COLLECTIONS),
        }
    except StoreUnavailableError as e:
        return {
            "status": "unhealthy",
            "database": "error",
            "error": str(e),
        }
