"""
Built-in catalog of European countries and regions.

Country codes and subdivision codes are the ones Nager.Date uses, so a
region's code can be matched directly against a holiday's ``counties``.
Every location here uses the Saturday/Sunday weekend; locations with other
weekend days can still be passed inline by API callers.
"""

from app.schemas.location import LocationConfig

STANDARD_WEEKEND = [0, 6]

# Seed selection used on first load when no saved state exists
DEFAULT_SELECTED_LOCATIONS = ["cy", "de-by", "ru"]

POPULAR_LOCATION_IDS = [
    "cy",
    "de-by",
    "de-be",
    "de-nw",
    "ru",
    "gb-eng",
    "gb-sct",
    "fr",
    "es-md",
    "es-ct",
    "it",
    "nl",
    "at-9",
    "ch-zh",
    "pl",
]

# (id, name, country code, region code)
_LOCATION_ROWS: list[tuple[str, str, str, str | None]] = [
    ("al", "Albania", "AL", None),
    ("ad", "Andorra", "AD", None),
    ("at", "Austria", "AT", None),
    ("at-1", "Austria — Burgenland", "AT", "AT-1"),
    ("at-2", "Austria — Carinthia", "AT", "AT-2"),
    ("at-3", "Austria — Lower Austria", "AT", "AT-3"),
    ("at-4", "Austria — Upper Austria", "AT", "AT-4"),
    ("at-5", "Austria — Salzburg", "AT", "AT-5"),
    ("at-6", "Austria — Styria", "AT", "AT-6"),
    ("at-7", "Austria — Tyrol", "AT", "AT-7"),
    ("at-8", "Austria — Vorarlberg", "AT", "AT-8"),
    ("at-9", "Austria — Vienna", "AT", "AT-9"),
    ("by", "Belarus", "BY", None),
    ("be", "Belgium", "BE", None),
    ("ba", "Bosnia and Herzegovina", "BA", None),
    ("bg", "Bulgaria", "BG", None),
    ("hr", "Croatia", "HR", None),
    ("cy", "Cyprus", "CY", None),
    ("cz", "Czech Republic", "CZ", None),
    ("dk", "Denmark", "DK", None),
    ("ee", "Estonia", "EE", None),
    ("fi", "Finland", "FI", None),
    ("fr", "France", "FR", None),
    ("fr-als", "France — Alsace", "FR", "FR-A"),
    ("fr-mos", "France — Moselle", "FR", "FR-57"),
    ("de", "Germany", "DE", None),
    ("de-bw", "Germany — Baden-Württemberg", "DE", "DE-BW"),
    ("de-by", "Germany — Bavaria", "DE", "DE-BY"),
    ("de-be", "Germany — Berlin", "DE", "DE-BE"),
    ("de-bb", "Germany — Brandenburg", "DE", "DE-BB"),
    ("de-hb", "Germany — Bremen", "DE", "DE-HB"),
    ("de-hh", "Germany — Hamburg", "DE", "DE-HH"),
    ("de-he", "Germany — Hesse", "DE", "DE-HE"),
    ("de-mv", "Germany — Mecklenburg-Vorpommern", "DE", "DE-MV"),
    ("de-ni", "Germany — Lower Saxony", "DE", "DE-NI"),
    ("de-nw", "Germany — North Rhine-Westphalia", "DE", "DE-NW"),
    ("de-rp", "Germany — Rhineland-Palatinate", "DE", "DE-RP"),
    ("de-sl", "Germany — Saarland", "DE", "DE-SL"),
    ("de-sn", "Germany — Saxony", "DE", "DE-SN"),
    ("de-st", "Germany — Saxony-Anhalt", "DE", "DE-ST"),
    ("de-sh", "Germany — Schleswig-Holstein", "DE", "DE-SH"),
    ("de-th", "Germany — Thuringia", "DE", "DE-TH"),
    ("gr", "Greece", "GR", None),
    ("hu", "Hungary", "HU", None),
    ("is", "Iceland", "IS", None),
    ("ie", "Ireland", "IE", None),
    ("it", "Italy", "IT", None),
    ("lv", "Latvia", "LV", None),
    ("li", "Liechtenstein", "LI", None),
    ("lt", "Lithuania", "LT", None),
    ("lu", "Luxembourg", "LU", None),
    ("mt", "Malta", "MT", None),
    ("md", "Moldova", "MD", None),
    ("mc", "Monaco", "MC", None),
    ("me", "Montenegro", "ME", None),
    ("nl", "Netherlands", "NL", None),
    ("mk", "North Macedonia", "MK", None),
    ("no", "Norway", "NO", None),
    ("pl", "Poland", "PL", None),
    ("pt", "Portugal", "PT", None),
    ("ro", "Romania", "RO", None),
    ("ru", "Russia", "RU", None),
    ("sm", "San Marino", "SM", None),
    ("rs", "Serbia", "RS", None),
    ("sk", "Slovakia", "SK", None),
    ("si", "Slovenia", "SI", None),
    ("es", "Spain", "ES", None),
    ("es-an", "Spain — Andalusia", "ES", "ES-AN"),
    ("es-ar", "Spain — Aragon", "ES", "ES-AR"),
    ("es-as", "Spain — Asturias", "ES", "ES-AS"),
    ("es-cn", "Spain — Canary Islands", "ES", "ES-CN"),
    ("es-cb", "Spain — Cantabria", "ES", "ES-CB"),
    ("es-cl", "Spain — Castile and León", "ES", "ES-CL"),
    ("es-cm", "Spain — Castilla-La Mancha", "ES", "ES-CM"),
    ("es-ct", "Spain — Catalonia", "ES", "ES-CT"),
    ("es-ex", "Spain — Extremadura", "ES", "ES-EX"),
    ("es-ga", "Spain — Galicia", "ES", "ES-GA"),
    ("es-ib", "Spain — Balearic Islands", "ES", "ES-IB"),
    ("es-ri", "Spain — La Rioja", "ES", "ES-RI"),
    ("es-md", "Spain — Madrid", "ES", "ES-MD"),
    ("es-mc", "Spain — Murcia", "ES", "ES-MC"),
    ("es-nc", "Spain — Navarre", "ES", "ES-NC"),
    ("es-pv", "Spain — Basque Country", "ES", "ES-PV"),
    ("es-vc", "Spain — Valencia", "ES", "ES-VC"),
    ("se", "Sweden", "SE", None),
    ("ch", "Switzerland", "CH", None),
    ("ch-ag", "Switzerland — Aargau", "CH", "CH-AG"),
    ("ch-ai", "Switzerland — Appenzell Innerrhoden", "CH", "CH-AI"),
    ("ch-ar", "Switzerland — Appenzell Ausserrhoden", "CH", "CH-AR"),
    ("ch-be", "Switzerland — Bern", "CH", "CH-BE"),
    ("ch-bl", "Switzerland — Basel-Landschaft", "CH", "CH-BL"),
    ("ch-bs", "Switzerland — Basel-Stadt", "CH", "CH-BS"),
    ("ch-fr", "Switzerland — Fribourg", "CH", "CH-FR"),
    ("ch-ge", "Switzerland — Geneva", "CH", "CH-GE"),
    ("ch-gl", "Switzerland — Glarus", "CH", "CH-GL"),
    ("ch-gr", "Switzerland — Graubünden", "CH", "CH-GR"),
    ("ch-ju", "Switzerland — Jura", "CH", "CH-JU"),
    ("ch-lu", "Switzerland — Lucerne", "CH", "CH-LU"),
    ("ch-ne", "Switzerland — Neuchâtel", "CH", "CH-NE"),
    ("ch-nw", "Switzerland — Nidwalden", "CH", "CH-NW"),
    ("ch-ow", "Switzerland — Obwalden", "CH", "CH-OW"),
    ("ch-sg", "Switzerland — St. Gallen", "CH", "CH-SG"),
    ("ch-sh", "Switzerland — Schaffhausen", "CH", "CH-SH"),
    ("ch-so", "Switzerland — Solothurn", "CH", "CH-SO"),
    ("ch-sz", "Switzerland — Schwyz", "CH", "CH-SZ"),
    ("ch-tg", "Switzerland — Thurgau", "CH", "CH-TG"),
    ("ch-ti", "Switzerland — Ticino", "CH", "CH-TI"),
    ("ch-ur", "Switzerland — Uri", "CH", "CH-UR"),
    ("ch-vd", "Switzerland — Vaud", "CH", "CH-VD"),
    ("ch-vs", "Switzerland — Valais", "CH", "CH-VS"),
    ("ch-zg", "Switzerland — Zug", "CH", "CH-ZG"),
    ("ch-zh", "Switzerland — Zürich", "CH", "CH-ZH"),
    ("tr", "Turkey", "TR", None),
    ("ua", "Ukraine", "UA", None),
    ("gb", "United Kingdom", "GB", None),
    ("gb-eng", "United Kingdom — England", "GB", "GB-ENG"),
    ("gb-nir", "United Kingdom — Northern Ireland", "GB", "GB-NIR"),
    ("gb-sct", "United Kingdom — Scotland", "GB", "GB-SCT"),
    ("gb-wls", "United Kingdom — Wales", "GB", "GB-WLS"),
    ("va", "Vatican City", "VA", None),
]

EUROPEAN_LOCATIONS: list[LocationConfig] = [
    LocationConfig(
        id=location_id,
        name=name,
        country_code=country_code,
        region_code=region_code,
        weekend_days=list(STANDARD_WEEKEND),
        color="",
        kind="region" if region_code else "country",
    )
    for location_id, name, country_code, region_code in _LOCATION_ROWS
]

_BY_ID: dict[str, LocationConfig] = {loc.id: loc for loc in EUROPEAN_LOCATIONS}


def get_location_by_id(location_id: str) -> LocationConfig | None:
    return _BY_ID.get(location_id)


def get_locations_by_country() -> dict[str, list[LocationConfig]]:
    """Group locations under their country name ("Germany — Bavaria" -> "Germany")."""
    grouped: dict[str, list[LocationConfig]] = {}
    for location in EUROPEAN_LOCATIONS:
        country_name = location.name.split(" — ")[0]
        grouped.setdefault(country_name, []).append(location)
    return grouped


def get_popular_locations() -> list[LocationConfig]:
    """Curated subset for quick selection, in catalog order."""
    popular = set(POPULAR_LOCATION_IDS)
    return [loc for loc in EUROPEAN_LOCATIONS if loc.id in popular]


def get_all_locations_for_dropdown() -> list[dict[str, str]]:
    return [{"id": loc.id, "name": loc.name, "type": loc.kind} for loc in EUROPEAN_LOCATIONS]


def resolve_locations(location_ids: list[str], theme: str) -> list[LocationConfig]:
    """
    Catalog locations for the given ids, in request order, colored for ``theme``.

    Unknown ids are dropped.
    """
    from app.services.colors import FALLBACK_COLOR, assign_colors

    locations = [loc for loc in map(get_location_by_id, location_ids) if loc is not None]
    colors = assign_colors([loc.id for loc in locations], theme)
    return [
        loc.model_copy(update={"color": colors.get(loc.id, FALLBACK_COLOR)}) for loc in locations
    ]
