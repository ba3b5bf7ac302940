"""Fixed-size character chunking.

Boundaries are pure character counts: a chunk may end in the middle of a
word or a sentence. The combined scrape buffer is chunked as one document,
so every chunk shares the ingestion batch id.

Public API
~~~~~~~~~~
    TextChunker(chunk_size).split(text, batch_id) -> ChunkSequence
    split_text(text, chunk_size)                  -> Iterator[str]
"""
from __future__ import annotations

from typing import Iterator

from aven_support.config import CHUNK_SIZE, INGEST_BATCH_ID
from aven_support.core.schema import Chunk

__all__ = ["ChunkSequence", "TextChunker", "split_text"]


def split_text(text: str, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Yield consecutive ``chunk_size`` slices of *text*; the last may be shorter."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    for i in range(0, len(text), chunk_size):
        yield text[i : i + chunk_size]


class ChunkSequence:
    """Lazy, restartable view of the chunks of one text.

    Every ``iter()`` starts again from offset 0, so the sequence can be
    walked more than once (e.g. counted, then embedded) without copying.
    """

    def __init__(self, text: str, chunk_size: int, batch_id: str):
        self.text = text
        self.chunk_size = chunk_size
        self.batch_id = batch_id

    def __len__(self) -> int:
        return -(-len(self.text) // self.chunk_size)

    def __iter__(self) -> Iterator[Chunk]:
        for index, start in enumerate(range(0, len(self.text), self.chunk_size)):
            end = min(start + self.chunk_size, len(self.text))
            yield Chunk(
                index=index,
                start=start,
                end=end,
                text=self.text[start:end],
                batch_id=self.batch_id,
            )


class TextChunker:
    """Split concatenated document text into fixed-size character chunks."""

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def split(self, text: str, batch_id: str = INGEST_BATCH_ID) -> ChunkSequence:
        return ChunkSequence(text, self.chunk_size, batch_id)
