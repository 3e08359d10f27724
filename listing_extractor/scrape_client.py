"""
HTTP client for the remote scrape provider (Firecrawl-compatible API).
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import config
from .models import RawPageContent

logger = logging.getLogger(__name__)

DEFAULT_FORMATS = ["markdown", "html"]


class ScrapeProviderError(Exception):
    """The scrape provider could not return page content."""

    def __init__(self, message: str, status_code: int = 502, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


def new_client(timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create an AsyncClient for provider calls."""
    return httpx.AsyncClient(
        timeout=config.SCRAPE_TIMEOUT if timeout is None else timeout,
        headers={"Content-Type": "application/json"},
        transport=transport,
    )


class ScrapeClient:
    """Fetches page markdown/HTML for a URL from the scrape provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = config.FIRECRAWL_API_KEY if api_key is None else api_key
        self.api_url = api_url or config.FIRECRAWL_API_URL
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ScrapeClient":
        if self._client is None:
            self._client = new_client()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch_raw(
        self,
        url: str,
        formats: Optional[List[str]] = None,
        only_main_content: bool = True,
    ) -> Dict[str, Any]:
        """POST a scrape request and return the provider's JSON payload."""
        if not self.api_key:
            raise ScrapeProviderError("Firecrawl API key not configured", status_code=500)
        if not url:
            raise ScrapeProviderError("URL is required", status_code=400)

        if self._client is None:
            self._client = new_client()
            self._owns_client = True

        body = {
            "url": url,
            "formats": formats or DEFAULT_FORMATS,
            "onlyMainContent": only_main_content,
        }
        logger.info(f"Scraping URL: {url}")
        try:
            resp = await self._client.post(
                self.api_url,
                json=body,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Scrape request failed for {url}: {e}")
            raise ScrapeProviderError(f"Network error: {e}") from e

        logger.debug(f"Provider response status: {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError:
            payload = {"raw": resp.text}

        if resp.status_code >= 400:
            logger.error(f"Provider error {resp.status_code}: {payload}")
            raise ScrapeProviderError(
                f"Firecrawl API error: {resp.status_code}",
                status_code=resp.status_code,
                details=payload,
            )
        return payload

    async def fetch(
        self,
        url: str,
        formats: Optional[List[str]] = None,
        only_main_content: bool = True,
    ) -> RawPageContent:
        """Fetch a page and wrap its text as RawPageContent."""
        payload = await self.fetch_raw(url, formats=formats, only_main_content=only_main_content)
        return RawPageContent.from_response(payload)
