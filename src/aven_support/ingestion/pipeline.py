import logging

from aven_support.core.chunking import TextChunker
from aven_support.ingestion.fetcher import Fetcher
from aven_support.ingestion.indexer import Indexer

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Fetcher -> Chunker -> Embedder -> Indexer, run as one sequential batch."""

    def __init__(self, fetcher: Fetcher, chunker: TextChunker, indexer: Indexer):
        self.fetcher = fetcher
        self.chunker = chunker
        self.indexer = indexer

    async def run(self, urls: list[str], batch_id: str) -> int:
        text = await self.fetcher.collect(urls)
        chunks = self.chunker.split(text, batch_id=batch_id)
        logger.info("Split content into %d chunks", len(chunks))
        written = await self.indexer.index(chunks, source_urls=urls)
        logger.info("Successfully processed and inserted %d chunks into Pinecone", written)
        return written
