"""
Pydantic schemas for official locations (countries and regions).
"""

from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import BaseSchema


class LocationConfig(BaseSchema):
    """
    A country or sub-country region whose holidays come from Nager.Date.

    ``weekend_days`` uses JavaScript weekday numbering (0 = Sunday,
    6 = Saturday) to stay compatible with stored frontend selections.
    """

    id: str = Field(..., min_length=1)
    name: str
    country_code: str = Field(..., min_length=2, max_length=2)
    region_code: Optional[str] = None
    weekend_days: list[int] = Field(default_factory=lambda: [0, 6])
    color: str = ""
    kind: Literal["country", "region"] = Field(default="country", alias="type")


class LocationListItem(BaseSchema):
    """Flat entry for location pickers."""

    id: str
    name: str
    kind: Optional[str] = Field(default=None, alias="type")
