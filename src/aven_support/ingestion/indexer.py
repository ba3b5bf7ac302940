import asyncio
import logging
import time
from typing import Callable, Iterable, Sized

from aven_support.config import INGEST_CATEGORY
from aven_support.core.rate_limit import RateLimiter
from aven_support.core.schema import Chunk, IndexRecord

logger = logging.getLogger(__name__)


def record_id(chunk: Chunk, timestamp_ms: int) -> str:
    """Batch-scoped sequence plus wall-clock millis, unique across repeated runs."""
    return f"{chunk.batch_id}-chunk-{chunk.index}-{timestamp_ms}"


class Indexer:
    """Embeds chunks one at a time and upserts one record per chunk, in order."""

    def __init__(
        self,
        embedder,
        vector_store,
        rate_limiter: RateLimiter | None = None,
        category: str = INGEST_CATEGORY,
        clock: Callable[[], float] = time.time,
    ):
        self.embedder = embedder
        self.vector_store = vector_store
        self.rate_limiter = rate_limiter or RateLimiter()
        self.category = category
        self._clock = clock

    def build_record(self, chunk: Chunk, values: list[float], total_chunks: int, source_urls: list[str]) -> IndexRecord:
        return IndexRecord(
            id=record_id(chunk, int(self._clock() * 1000)),
            values=values,
            metadata={
                "text": chunk.text,
                "category": self.category,
                "source_urls": ", ".join(source_urls),
                "chunk_index": chunk.index,
                "total_chunks": total_chunks,
                "chunk_size": chunk.length,
            },
        )

    async def index(self, chunks: Iterable[Chunk], source_urls: list[str]) -> int:
        """Returns the number of records written."""
        if not isinstance(chunks, Sized):
            chunks = list(chunks)
        total = len(chunks)
        written = 0
        for chunk in chunks:
            await self.rate_limiter.wait()
            logger.info("Processing chunk %d/%d", chunk.index + 1, total)
            values = await self.embedder.embed_padded(chunk.text)
            record = self.build_record(chunk, values, total, source_urls)
            await asyncio.to_thread(self.vector_store.upsert_record, record)
            written += 1
            logger.info("Inserted chunk %d/%d into Pinecone (ns: %s)", chunk.index + 1, total, self.vector_store.namespace)
        return written
