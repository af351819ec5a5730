"""
Holidays API router.
Official public holidays for a country, optionally narrowed to one region.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.dependencies import get_holiday_provider
from app.exceptions import ValidationError
from app.schemas.holiday import Holiday
from app.schemas.location import LocationConfig
from app.services.holiday_provider import HolidayProvider, is_holiday_for_location

router = APIRouter()


@router.get("/holidays/{year}/{country_code}", response_model=list[Holiday])
async def get_official_holidays(
    year: int = Path(..., ge=1900, le=2200),
    country_code: str = Path(...),
    regionCode: Optional[str] = Query(None),
    provider: HolidayProvider = Depends(get_holiday_provider),
):
    """
    Holidays for a country and year.

    An unreachable holiday API yields an empty list, not an error.
    With ``regionCode`` only nationwide holidays and those of that region
    are returned.
    """
    if len(country_code) != 2 or not country_code.isalpha():
        raise ValidationError(f"Invalid country code: {country_code}")

    holidays = await provider.get_official_holidays(country_code.upper(), year)
    if not regionCode:
        return holidays

    scope = LocationConfig(
        id=regionCode.lower(),
        name=regionCode,
        country_code=country_code.upper(),
        region_code=regionCode,
        kind="region",
    )
    return [h for h in holidays if is_holiday_for_location(h, scope)]
