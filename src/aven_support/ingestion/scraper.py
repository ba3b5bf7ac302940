import logging

import httpx

from aven_support.config import FIRECRAWL_API_KEY, FIRECRAWL_API_URL
from aven_support.core.errors import UpstreamError, from_status

logger = logging.getLogger(__name__)

SCRAPE_TIMEOUT = 60.0  # seconds; rendering a page routinely exceeds httpx's 5 s default


class FirecrawlScraper:
    """Fetches main-content markdown for a URL from the Firecrawl scrape API."""

    def __init__(
        self,
        api_key: str | None = FIRECRAWL_API_KEY,
        api_url: str = FIRECRAWL_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.transport = transport

    async def scrape_markdown(self, url: str) -> str | None:
        """
        Returns the page markdown, or None when the service produced none.
        Raises a typed upstream error when the HTTP call itself fails.
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=SCRAPE_TIMEOUT) as client:
            try:
                response = await client.post(
                    f"{self.api_url}/v1/scrape",
                    headers={"Authorization": f"Bearer {self.api_key or ''}"},
                    json={"url": url, "formats": ["markdown"], "onlyMainContent": True},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as err:
                raise from_status(err.response.status_code, f"Firecrawl error for {url}: {err}") from err
            except httpx.HTTPError as err:
                raise UpstreamError(f"Firecrawl request for {url} failed: {err}") from err

        payload = response.json()
        if not payload.get("success", True):
            logger.debug("Firecrawl reported failure for %s: %s", url, payload.get("error"))
            return None
        return (payload.get("data") or {}).get("markdown") or None
