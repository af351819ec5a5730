"""
Pydantic schemas for color assignment.
"""

from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema
from app.schemas.grid import Theme


class ColorAssignRequest(BaseSchema):
    ids: list[str] = Field(default_factory=list)
    theme: Optional[Theme] = None


class ColorAssignResponse(BaseSchema):
    theme: Theme
    colors: dict[str, str]
    text_colors: dict[str, str]


class ContrastResponse(BaseSchema):
    background: str
    text_color: str


class ThemeSafeColorResponse(BaseSchema):
    theme: Theme
    original: str
    color: str
