"""Rate-limited scraping loop that builds the combined ingestion buffer."""
import logging
from datetime import datetime, timezone

from aven_support.core.errors import AssistantError, IngestionError
from aven_support.core.rate_limit import RateLimiter
from aven_support.core.schema import Document

logger = logging.getLogger(__name__)


def section_header(url: str) -> str:
    return f"\n\n=== Content from {url} ===\n\n"


def combine_documents(documents: list[Document]) -> str:
    """Concatenate documents in order, each behind its source header."""
    return "".join(section_header(doc.url) + doc.markdown for doc in documents)


class Fetcher:
    def __init__(self, scraper, rate_limiter: RateLimiter | None = None):
        self.scraper = scraper
        self.rate_limiter = rate_limiter or RateLimiter()

    async def fetch(self, urls: list[str]) -> list[Document]:
        """Scrape every URL in order; a URL that yields nothing is skipped."""
        documents = []
        for i, url in enumerate(urls, 1):
            await self.rate_limiter.wait()
            logger.info("Scraping %d/%d: %s", i, len(urls), url)
            try:
                markdown = await self.scraper.scrape_markdown(url)
            except AssistantError as err:
                logger.warning("Failed to scrape content from: %s (%s)", url, err.message)
                continue
            if not markdown:
                logger.warning("Failed to scrape content from: %s", url)
                continue
            documents.append(Document(url=url, markdown=markdown, fetched_at=datetime.now(timezone.utc)))
        return documents

    async def collect(self, urls: list[str]) -> str:
        """Scrape *urls* and return the combined buffer; fatal if nothing came back."""
        text = combine_documents(await self.fetch(urls))
        if not text.strip():
            raise IngestionError("Failed to scrape any content from the provided URLs")
        logger.info("Total scraped content length: %d characters", len(text))
        return text
