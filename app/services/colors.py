"""
Color assignment service.

Assigns maximally distinct colors to the active set of locations and
calendars. Candidates are spread around the hue wheel with the golden
angle, then a greedy max-min pass picks the subset that keeps every pair
as far apart as possible. All functions are pure: the same ids and theme
always produce the same colors.

Text colors on top of assigned backgrounds are picked by WCAG 2.0
relative-luminance contrast.
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable

HSL = tuple[float, float, float]

GOLDEN_ANGLE = 137.508
MIN_CANDIDATES = 24

WHITE_TEXT = "#ffffff"
DARK_TEXT = "#111111"

# Used when an id is missing from an assignment
FALLBACK_COLOR = "#888888"

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class ThemeColorParams:
    """HSL generation parameters for one theme."""

    saturation: float
    lightness: float
    saturation_variance: float
    lightness_variance: float
    min_lightness: float
    max_lightness: float


THEME_PARAMS: dict[str, ThemeColorParams] = {
    # Darker colors read better on a white background
    "light": ThemeColorParams(
        saturation=70,
        lightness=45,
        saturation_variance=15,
        lightness_variance=8,
        min_lightness=35,
        max_lightness=55,
    ),
    "dark": ThemeColorParams(
        saturation=65,
        lightness=58,
        saturation_variance=10,
        lightness_variance=6,
        min_lightness=50,
        max_lightness=68,
    ),
}


def _theme_params(theme: str) -> ThemeColorParams:
    try:
        return THEME_PARAMS[theme]
    except KeyError:
        raise ValueError(f"Unknown theme: {theme!r}") from None


def _js_round(value: float) -> int:
    """Round half up, the way browsers do (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def color_distance(a: HSL, b: HSL) -> float:
    """
    Perceptual distance approximation in HSL space.

    Hue difference is circular and weighted double since it dominates how
    distinct two swatches look. Saturation and lightness are on 0-100.
    """
    raw_hue = abs(a[0] - b[0])
    hue_diff = min(raw_hue, 360 - raw_hue) / 180
    sat_diff = abs(a[1] - b[1]) / 100
    light_diff = abs(a[2] - b[2]) / 100
    return math.sqrt(hue_diff**2 * 2 + sat_diff**2 + light_diff**2)


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    """Convert HSL (degrees, percent, percent) to a #rrggbb string."""
    s_norm = s / 100
    l_norm = l / 100

    c = (1 - abs(2 * l_norm - 1)) * s_norm
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l_norm - c / 2

    if 0 <= h < 60:
        r, g, b = c, x, 0.0
    elif 60 <= h < 120:
        r, g, b = x, c, 0.0
    elif 120 <= h < 180:
        r, g, b = 0.0, c, x
    elif 180 <= h < 240:
        r, g, b = 0.0, x, c
    elif 240 <= h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return "#" + "".join(f"{_js_round((v + m) * 255):02x}" for v in (r, g, b))


def is_hex_color(value: str) -> bool:
    return bool(_HEX_RE.match(value or ""))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse #rrggbb; anything unparseable is treated as mid grey."""
    match = _HEX_RE.match(hex_color or "")
    if not match:
        return (128, 128, 128)
    return (int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16))


def hex_to_hsl(hex_color: str) -> tuple[int, int, int]:
    """Parse #rrggbb into rounded HSL; unparseable input gives (0, 70, 50)."""
    match = _HEX_RE.match(hex_color or "")
    if not match:
        return (0, 70, 50)

    r = int(match.group(1), 16) / 255
    g = int(match.group(2), 16) / 255
    b = int(match.group(3), 16) / 255

    high = max(r, g, b)
    low = min(r, g, b)
    h = 0.0
    s = 0.0
    lightness = (high + low) / 2

    if high != low:
        d = high - low
        s = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return (_js_round(h * 360), _js_round(s * 100), _js_round(lightness * 100))


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """
    Relative luminance per WCAG 2.0.
    https://www.w3.org/TR/WCAG20/#relativeluminancedef
    """

    def channel(c: int) -> float:
        srgb = c / 255
        return srgb / 12.92 if srgb <= 0.03928 else ((srgb + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(lum1: float, lum2: float) -> float:
    """Contrast ratio between two luminances per WCAG 2.0."""
    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def get_contrast_text_color(bg_color: str) -> str:
    """
    Pick white or near-black text for a background color, whichever has
    the higher contrast ratio. Ties go to white.
    """
    bg_luminance = relative_luminance(hex_to_rgb(bg_color))
    with_white = contrast_ratio(bg_luminance, relative_luminance((255, 255, 255)))
    with_dark = contrast_ratio(bg_luminance, relative_luminance((17, 17, 17)))
    return WHITE_TEXT if with_white >= with_dark else DARK_TEXT


def ensure_theme_safe_color(hex_color: str, theme: str) -> str:
    """
    Clamp a color into theme-safe lightness/saturation, keeping its hue.

    Light theme: not too light to see on white (L <= 55, S >= 50).
    Dark theme: not too dark to see on a dark background (L >= 50, S >= 45).
    """
    _theme_params(theme)
    h, s, lightness = hex_to_hsl(hex_color)

    if theme == "light":
        return hsl_to_hex(h, max(s, 50), min(lightness, 55))
    return hsl_to_hex(h, max(s, 45), max(lightness, 50))


def generate_candidate_colors(count: int, theme: str) -> list[HSL]:
    """Golden-angle hue spread with small saturation/lightness jitter."""
    params = _theme_params(theme)
    start_hue = (count * 31) % 360
    colors: list[HSL] = []

    for i in range(count):
        hue = (start_hue + i * GOLDEN_ANGLE) % 360
        sat_variation = ((i % 3) - 1) * params.saturation_variance
        light_variation = ((i % 5) - 2) * params.lightness_variance * 0.5

        saturation = max(40, min(90, params.saturation + sat_variation))
        lightness = max(
            params.min_lightness,
            min(params.max_lightness, params.lightness + light_variation),
        )
        colors.append((hue, saturation, lightness))

    return colors


def select_distinct_colors(candidates: list[HSL], count: int) -> list[HSL]:
    """
    Greedy max-min selection.

    Always starts from the first candidate, then repeatedly takes the
    candidate farthest from everything already chosen. Ties keep the
    earliest candidate.
    """
    if count <= 0:
        return []
    if count >= len(candidates):
        return list(candidates)

    selected = [candidates[0]]
    remaining = list(candidates[1:])
    # Minimum distance from each remaining candidate to the selected set
    min_dists = [color_distance(c, selected[0]) for c in remaining]

    while len(selected) < count and remaining:
        best_idx = 0
        best_dist = -1.0
        for i, dist in enumerate(min_dists):
            if dist > best_dist:
                best_dist = dist
                best_idx = i

        chosen = remaining.pop(best_idx)
        min_dists.pop(best_idx)
        selected.append(chosen)
        min_dists = [min(d, color_distance(c, chosen)) for c, d in zip(remaining, min_dists)]

    return selected


def assign_colors(ids: Iterable[str], theme: str) -> dict[str, str]:
    """
    Assign maximally distinct colors to a set of ids.

    Args:
        ids: Location/calendar ids currently active (order does not matter).
        theme: "light" or "dark".

    Returns:
        Mapping of id to #rrggbb, in sorted id order.
    """
    sorted_ids = sorted(set(ids))
    count = len(sorted_ids)
    if count == 0:
        return {}

    candidates = generate_candidate_colors(max(count * 3, MIN_CANDIDATES), theme)
    selected = select_distinct_colors(candidates, count)
    return {cid: hsl_to_hex(*hsl) for cid, hsl in zip(sorted_ids, selected)}


def get_minimum_distance(colors: list[str]) -> float:
    """Smallest pairwise distance among hex colors (inf for fewer than two)."""
    if len(colors) < 2:
        return math.inf

    hsl_colors = [hex_to_hsl(c) for c in colors]
    min_dist = math.inf
    for i in range(len(hsl_colors)):
        for j in range(i + 1, len(hsl_colors)):
            min_dist = min(min_dist, color_distance(hsl_colors[i], hsl_colors[j]))
    return min_dist


def are_colors_distinct(colors: list[str], threshold: float = 0.25) -> bool:
    """True when every pair is at least ``threshold`` apart."""
    return get_minimum_distance(colors) >= threshold
