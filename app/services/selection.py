"""
Resolves a request's location/calendar selection into concrete models.

Locations can be named by catalog id or passed inline; custom calendars by
stored id or inline. The whole active set is colored in one assignment so
official locations and calendars never share a color.
"""

import logging

from app.data.locations import get_location_by_id
from app.schemas.grid import CalendarSelection, Theme
from app.schemas.holiday import CustomCalendar
from app.schemas.location import LocationConfig
from app.services.colors import FALLBACK_COLOR, assign_colors
from app.services.custom_calendars import CustomCalendarRepository

logger = logging.getLogger(__name__)


def _dedupe_by(items, key):
    seen = set()
    result = []
    for item in items:
        k = key(item)
        if k not in seen:
            seen.add(k)
            result.append(item)
    return result


def resolve_selection(
    selection: CalendarSelection,
    repository: CustomCalendarRepository,
    default_theme: Theme = "light",
) -> tuple[list[LocationConfig], list[CustomCalendar]]:
    """
    Materialize and color the selected locations and calendars.

    Unknown catalog or calendar ids are skipped. Inline locations that
    already carry a color keep it; everything else is colored by
    ``assign_colors`` over the combined id set.

    Returns:
        (official locations, custom calendars), each in request order.
    """
    theme = selection.theme or default_theme

    locations: list[LocationConfig] = []
    for location_id in selection.location_ids:
        location = get_location_by_id(location_id)
        if location is None:
            logger.debug("Skipping unknown location id %s", location_id)
            continue
        locations.append(location)
    locations.extend(selection.locations)
    locations = _dedupe_by(locations, lambda loc: loc.id)

    calendars = repository.get_many(selection.calendar_ids) + list(selection.calendars)
    calendars = _dedupe_by(calendars, lambda cal: cal.meta.id)

    colors = assign_colors(
        [loc.id for loc in locations] + [cal.location_id for cal in calendars], theme
    )

    colored_locations = [
        loc if loc.color else loc.model_copy(update={"color": colors.get(loc.id, FALLBACK_COLOR)})
        for loc in locations
    ]
    colored_calendars = [
        cal.model_copy(
            update={
                "meta": cal.meta.model_copy(
                    update={"default_color": colors.get(cal.location_id, FALLBACK_COLOR)}
                )
            }
        )
        for cal in calendars
    ]
    return colored_locations, colored_calendars
