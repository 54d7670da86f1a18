from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from sendr.core.config import get_settings
from sendr.core.enums import Category
from sendr.dependencies import get_store
from sendr.schemas.browse import BrowseItem, Location
from sendr.services.browse_service import BrowseService
from sendr.store import DocumentStore

router = APIRouter(tags=["browse"])


@router.get("/browse", response_model=List[BrowseItem])
async def browse(
    category: Optional[str] = Query(None, description="Category id, e.g. fruits-veg"),
    q: str = Query("", description="Search product or shop name"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0, description="Only used with lat/lng"),
    store: DocumentStore = Depends(get_store),
):
    """Customer product listing with category, search and distance filters."""
    if (lat is None) != (lng is None):
        raise HTTPException(status_code=400, detail="lat and lng must be given together")

    location = Location(lat=lat, lng=lng) if lat is not None else None
    service = BrowseService(store, default_radius_km=get_settings().DEFAULT_RADIUS_KM)
    return await service.browse(category=category, search=q, location=location, radius_km=radius_km)


@router.get("/categories")
async def list_categories():
    """Category ids and display labels for the storefront's category bar."""
    return [{"id": category.value, "label": category.label} for category in Category]
