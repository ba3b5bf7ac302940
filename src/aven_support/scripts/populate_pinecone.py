"""Scrape the Aven site and load it into Pinecone.

Runs the ingestion pipeline once over ``SCRAPE_URLS``; each run appends new,
timestamp-qualified records next to those of earlier runs.

Environment variables
---------------------
FIRECRAWL_API_KEY – Firecrawl key for scraping
GOOGLE_API_KEY    – Gemini key for embeddings
PINECONE_API_KEY  – Pinecone key
PINECONE_HOST     – optional index host override
"""
import asyncio
import logging
import sys

from aven_support.config import (
    CHUNK_SIZE, INGEST_BATCH_ID, RATE_LIMIT_INTERVAL, SCRAPE_URLS, configure_logging,
)
from aven_support.core.chunking import TextChunker
from aven_support.core.embeddings import EmbeddingClient
from aven_support.core.errors import AssistantError
from aven_support.core.rate_limit import RateLimiter
from aven_support.ingestion.fetcher import Fetcher
from aven_support.ingestion.indexer import Indexer
from aven_support.ingestion.pipeline import IngestionPipeline
from aven_support.ingestion.scraper import FirecrawlScraper
from aven_support.rag.vector_store import PineconeVectorStore

LOGGER = logging.getLogger("populate_pinecone")


def build_ingestion_pipeline() -> IngestionPipeline:
    vector_store = PineconeVectorStore()
    vector_store.validate_dimension()
    # scraping and embedding are separate 10 RPM quotas
    fetcher = Fetcher(FirecrawlScraper(), RateLimiter(RATE_LIMIT_INTERVAL))
    indexer = Indexer(EmbeddingClient(), vector_store, RateLimiter(RATE_LIMIT_INTERVAL))
    return IngestionPipeline(fetcher, TextChunker(CHUNK_SIZE), indexer)


async def populate_pinecone_db(urls: list[str], batch_id: str = INGEST_BATCH_ID) -> int:
    pipeline = build_ingestion_pipeline()
    return await pipeline.run(urls, batch_id=batch_id)


def main() -> int:
    configure_logging()
    try:
        asyncio.run(populate_pinecone_db(SCRAPE_URLS))
    except AssistantError as err:
        LOGGER.error("Script failed: %s", err.message)
        return 1
    except Exception:
        LOGGER.exception("Script failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
