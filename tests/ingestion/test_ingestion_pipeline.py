"""
Test suite for the end-to-end ingestion batch with faked services.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from aven_support.core.chunking import TextChunker
from aven_support.core.errors import IngestionError
from aven_support.ingestion.fetcher import Fetcher
from aven_support.ingestion.indexer import Indexer
from aven_support.ingestion.pipeline import IngestionPipeline

from conftest import FakeVectorStore

URLS = ["https://www.aven.com", "https://www.aven.com/reviews", "https://www.aven.com/app"]


class TestIngestionPipeline:

    @pytest.mark.asyncio
    async def test_run_should_index_chunks_of_combined_text(self, rate_limiter, fake_embedder) -> None:
        # Arrange
        scraper = AsyncMock()
        scraper.scrape_markdown.side_effect = ["A" * 30, None, "B" * 30]
        store = FakeVectorStore()
        pipeline = IngestionPipeline(
            Fetcher(scraper, rate_limiter),
            TextChunker(chunk_size=40),
            Indexer(fake_embedder, store, rate_limiter),
        )

        # Act
        written = await pipeline.run(URLS, batch_id="aven-support")

        # Assert
        combined = "".join(r.metadata["text"] for r in store.records)
        assert written == len(store.records)
        assert "=== Content from https://www.aven.com ===" in combined
        assert "=== Content from https://www.aven.com/app ===" in combined
        assert "reviews ===" not in combined
        assert all(r.id.startswith("aven-support-chunk-") for r in store.records)

    @pytest.mark.asyncio
    async def test_total_scrape_failure_should_abort_before_chunking(self, rate_limiter) -> None:
        # Arrange
        scraper = AsyncMock()
        scraper.scrape_markdown.return_value = None
        chunker = MagicMock()
        indexer = AsyncMock()
        pipeline = IngestionPipeline(Fetcher(scraper, rate_limiter), chunker, indexer)

        # Act / Assert
        with pytest.raises(IngestionError):
            await pipeline.run(URLS, batch_id="aven-support")
        chunker.split.assert_not_called()
        indexer.index.assert_not_called()
