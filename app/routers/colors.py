"""
Colors API router.
Distinct color assignment and contrast helpers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings
from app.dependencies import get_app_settings
from app.exceptions import ValidationError
from app.schemas.color import (
    ColorAssignRequest,
    ColorAssignResponse,
    ContrastResponse,
    ThemeSafeColorResponse,
)
from app.schemas.grid import Theme
from app.services.colors import (
    assign_colors,
    ensure_theme_safe_color,
    get_contrast_text_color,
    is_hex_color,
)

router = APIRouter()


def _require_hex(color: str) -> str:
    if not is_hex_color(color):
        raise ValidationError(f"Invalid hex color: {color}")
    return color if color.startswith("#") else f"#{color}"


@router.post("/colors/assign", response_model=ColorAssignResponse)
async def assign(
    body: ColorAssignRequest,
    settings: Settings = Depends(get_app_settings),
):
    """
    Colors for the active ids. The same id set always gets the same colors,
    whatever order it is sent in.
    """
    theme = body.theme or settings.default_theme
    colors = assign_colors(body.ids, theme)
    return ColorAssignResponse(
        theme=theme,
        colors=colors,
        text_colors={cid: get_contrast_text_color(c) for cid, c in colors.items()},
    )


@router.get("/colors/contrast", response_model=ContrastResponse)
async def contrast(background: str = Query(..., description="Background color, #rrggbb")):
    background = _require_hex(background)
    return ContrastResponse(background=background, text_color=get_contrast_text_color(background))


@router.get("/colors/theme-safe", response_model=ThemeSafeColorResponse)
async def theme_safe(
    color: str = Query(...),
    theme: Optional[Theme] = Query(None),
    settings: Settings = Depends(get_app_settings),
):
    color = _require_hex(color)
    theme = theme or settings.default_theme
    return ThemeSafeColorResponse(
        theme=theme,
        original=color,
        color=ensure_theme_safe_color(color, theme),
    )
