"""
Official holiday provider.

Fetches public holidays from the Nager.Date API and memoizes them per
(country, year). The cache is an explicit object owned by the provider, so
tests and separate application instances never share state.

Concurrent requests for the same (country, year) share a single in-flight
fetch. Failed fetches are not cached: the provider logs them and returns an
empty list, and the next call tries again.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

import httpx

from app.config import Settings
from app.exceptions import HolidayFetchError
from app.schemas.holiday import Holiday
from app.schemas.location import LocationConfig
from app.services.proxy import ProxyResolver

logger = logging.getLogger(__name__)

CacheKey = tuple[str, int]


def is_holiday_for_location(holiday: Holiday, location: LocationConfig) -> bool:
    """
    Whether a country-level holiday applies to a location.

    Country-wide locations take every holiday; regional locations take
    holidays without a county restriction plus those listing their region.
    """
    if not location.region_code:
        return True
    if not holiday.counties:
        return True
    return location.region_code in holiday.counties


class HolidaySource(Protocol):
    async def fetch_public_holidays(self, country_code: str, year: int) -> list[Holiday]: ...


def parse_nager_holidays(payload: Any, country_code: str) -> list[Holiday]:
    """Convert a Nager.Date ``PublicHolidays`` response into Holiday models."""
    if not isinstance(payload, list):
        raise ValueError("expected a JSON array of holidays")

    holidays: list[Holiday] = []
    for item in payload:
        if not isinstance(item, dict) or not item.get("date"):
            continue
        name = item.get("name") or item.get("localName") or "Holiday"
        holidays.append(
            Holiday(
                date=item["date"],
                name=name,
                local_name=item.get("localName") or name,
                country_code=item.get("countryCode") or country_code,
                counties=item.get("counties") or None,
                type="PUBLIC_HOLIDAY",
                source="official",
            )
        )
    return holidays


class NagerHolidayClient:
    """Thin httpx client for ``GET /PublicHolidays/{year}/{countryCode}``."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        proxy_resolver: ProxyResolver | None = None,
    ):
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._proxy_resolver = proxy_resolver or ProxyResolver(settings)
        self._client_lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        async with self._client_lock:
            if self._client is None:
                options = await self._proxy_resolver.client_options()
                self._client = httpx.AsyncClient(
                    timeout=self._settings.holiday_fetch_timeout,
                    **options,
                )
        return self._client

    async def fetch_public_holidays(self, country_code: str, year: int) -> list[Holiday]:
        """
        Fetch a country's public holidays for one year.

        Raises:
            HolidayFetchError: on transport errors, non-2xx responses or an
                unexpected payload.
        """
        url = f"{self._settings.nager_base_url}/PublicHolidays/{year}/{country_code}"
        client = await self._get_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise HolidayFetchError(country_code, year, f"request error: {e}") from e

        if not response.is_success:
            raise HolidayFetchError(country_code, year, f"HTTP {response.status_code}")

        try:
            holidays = parse_nager_holidays(response.json(), country_code)
        except ValueError as e:
            raise HolidayFetchError(country_code, year, f"invalid payload: {e}") from e

        logger.debug("Received %d holidays for %s/%s", len(holidays), country_code, year)
        return holidays

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class HolidayCache:
    """
    Append-only (country, year) -> holidays store with fetch coalescing.

    While a key is being fetched, every caller awaits the same task. Only
    successful results are kept.
    """

    def __init__(self):
        self._entries: dict[CacheKey, list[Holiday]] = {}
        self._in_flight: dict[CacheKey, asyncio.Task] = {}

    @staticmethod
    def make_key(country_code: str, year: int) -> CacheKey:
        return (country_code.upper(), year)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[CacheKey]:
        return sorted(self._entries)

    def peek(self, country_code: str, year: int) -> list[Holiday] | None:
        return self._entries.get(self.make_key(country_code, year))

    async def get_or_fetch(
        self,
        country_code: str,
        year: int,
        loader: Callable[[str, int], Awaitable[list[Holiday]]],
    ) -> list[Holiday]:
        key = self.make_key(country_code, year)
        if key in self._entries:
            return self._entries[key]

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(loader(key[0], year))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._settle(key, done))

        # Shield so one cancelled caller does not cancel the shared fetch
        return await asyncio.shield(task)

    def _settle(self, key: CacheKey, task: asyncio.Task) -> None:
        self._in_flight.pop(key, None)
        if task.cancelled() or task.exception() is not None:
            return
        self._entries[key] = task.result()

    def clear(self) -> None:
        self._entries.clear()


class HolidayProvider:
    """Cached, failure-tolerant access to official holidays."""

    def __init__(self, source: HolidaySource, cache: HolidayCache | None = None):
        self.source = source
        self.cache = cache if cache is not None else HolidayCache()

    async def get_official_holidays(self, country_code: str, year: int) -> list[Holiday]:
        """
        Holidays for a country and year; never raises.

        Fetch failures are logged and degrade to an empty list, so a
        location simply shows no holidays for that year.
        """
        try:
            return await self.cache.get_or_fetch(
                country_code, year, self.source.fetch_public_holidays
            )
        except HolidayFetchError as e:
            # non-2xx responses carry no cause
            if e.__cause__ is None:
                logger.warning("%s", e)
            else:
                logger.error("%s", e)
        except Exception:
            logger.exception("Error fetching holidays for %s/%s", country_code, year)
        return []

    async def close(self) -> None:
        close = getattr(self.source, "close", None)
        if close is not None:
            await close()


def create_holiday_provider(settings: Settings) -> HolidayProvider:
    """Provider backed by Nager.Date with a fresh cache."""
    return HolidayProvider(NagerHolidayClient(settings))
