"""
Proxy configuration for outbound holiday API calls.
Supports PAC (Proxy Auto-Config) files and direct proxy URLs.
"""

import logging
import re
from urllib.parse import urlparse, urlunparse

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)

_PROXY_DIRECTIVE = re.compile(r'PROXY\s+([^;\s"\']+)', re.IGNORECASE)
_DIRECT = "DIRECT"


def parse_pac_proxy(pac_content: str) -> str | None:
    """
    Simple PAC file parser.

    PAC files are JavaScript, but the common ones boil down to
    ``return "PROXY host:port; DIRECT";``. The first PROXY directive wins;
    None means DIRECT.
    """
    matches = _PROXY_DIRECTIVE.findall(pac_content)
    if not matches:
        return None

    proxy_host = matches[0]
    if not proxy_host.startswith("http"):
        proxy_host = f"http://{proxy_host}"
    return proxy_host


def with_proxy_credentials(proxy_url: str, username: str, password: str) -> str:
    """Embed basic-auth credentials into a proxy URL."""
    parsed = urlparse(proxy_url)
    return urlunparse(
        (
            parsed.scheme,
            f"{username}:{password}@{parsed.netloc}",
            parsed.path,
            parsed.params,
            parsed.query,
            parsed.fragment,
        )
    )


class ProxyResolver:
    """
    Resolves which proxy (if any) outbound requests should use.

    Checks in order:
    1. Direct proxy settings (HTTPS_PROXY, HTTP_PROXY)
    2. PAC file (PROXY_PAC_URL), fetched once and remembered
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport
        self._pac_proxy: str | None = None

    async def resolve(self) -> str | None:
        """Proxy URL without credentials, or None for a direct connection."""
        settings = self._settings

        if settings.https_proxy:
            return settings.https_proxy
        if settings.http_proxy:
            return settings.http_proxy
        if not settings.proxy_pac_url:
            return None

        if self._pac_proxy is not None:
            return None if self._pac_proxy == _DIRECT else self._pac_proxy

        try:
            # Fetch PAC file without a proxy
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.get(settings.proxy_pac_url)
        except httpx.HTTPError as e:
            logger.warning("Error fetching PAC file %s: %s", settings.proxy_pac_url, e)
            return None

        if response.status_code != 200:
            logger.warning("Failed to fetch PAC file: HTTP %s", response.status_code)
            return None

        proxy = parse_pac_proxy(response.text)
        self._pac_proxy = proxy or _DIRECT
        if proxy:
            logger.info("PAC file resolved to proxy %s", proxy)
        else:
            logger.info("PAC file indicates DIRECT connection")
        return proxy

    async def client_options(self) -> dict:
        """Keyword arguments for ``httpx.AsyncClient`` (proxy and TLS verify)."""
        settings = self._settings
        proxy_url = await self.resolve()

        if proxy_url and settings.proxy_username and settings.proxy_password:
            proxy_url = with_proxy_credentials(
                proxy_url, settings.proxy_username, settings.proxy_password
            )
            logger.debug("Proxy authentication enabled for user %s", settings.proxy_username)

        # Custom CA cert takes precedence for corporate proxies doing SSL inspection
        verify: bool | str = settings.proxy_verify_ssl
        if settings.proxy_ca_cert:
            verify = settings.proxy_ca_cert
        elif not settings.proxy_verify_ssl:
            logger.warning("SSL verification disabled for holiday API requests")

        options: dict = {"verify": verify}
        if proxy_url:
            options["proxy"] = proxy_url
        return options
