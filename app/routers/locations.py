"""
Locations API router.
Read-only access to the built-in country/region catalog.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings
from app.data.locations import (
    DEFAULT_SELECTED_LOCATIONS,
    EUROPEAN_LOCATIONS,
    get_all_locations_for_dropdown,
    get_location_by_id,
    get_locations_by_country,
    get_popular_locations,
    resolve_locations,
)
from app.dependencies import get_app_settings
from app.exceptions import NotFoundError
from app.schemas.grid import Theme
from app.schemas.location import LocationConfig, LocationListItem

router = APIRouter()


@router.get("/locations", response_model=list[LocationConfig])
async def list_locations():
    """All catalog locations, uncolored, in catalog order."""
    return EUROPEAN_LOCATIONS


@router.get("/locations/dropdown", response_model=list[LocationListItem])
async def list_locations_for_dropdown():
    return get_all_locations_for_dropdown()


@router.get("/locations/by-country", response_model=dict[str, list[LocationConfig]])
async def list_locations_by_country():
    return get_locations_by_country()


@router.get("/locations/popular", response_model=list[LocationConfig])
async def list_popular_locations():
    return get_popular_locations()


@router.get("/locations/default", response_model=list[LocationConfig])
async def get_default_selection(
    theme: Optional[Theme] = Query(None),
    settings: Settings = Depends(get_app_settings),
):
    """Seed selection for a first visit, colored for the theme."""
    return resolve_locations(DEFAULT_SELECTED_LOCATIONS, theme or settings.default_theme)


@router.get("/locations/{location_id}", response_model=LocationConfig)
async def get_location(location_id: str):
    location = get_location_by_id(location_id)
    if location is None:
        raise NotFoundError("Location", location_id)
    return location
