import logging

import backoff
from langfuse.openai import openai

from aven_support.config import EMBEDDING_DIMENSION, EMBEDDING_MODEL
from aven_support.core.errors import EmbeddingDimensionError
from aven_support.core.llm_client import build_async_client, translate_openai_error

logger = logging.getLogger(__name__)


def pad_vector(values: list[float], dimension: int = EMBEDDING_DIMENSION) -> list[float]:
    """Right-pad *values* with zeros to exactly *dimension* entries.

    Vectors longer than *dimension* are refused rather than truncated.
    """
    if len(values) > dimension:
        raise EmbeddingDimensionError(
            f"Embedding has {len(values)} dimensions, index expects {dimension}"
        )
    return list(values) + [0.0] * (dimension - len(values))


class EmbeddingClient:
    """
    Async wrapper around the embeddings endpoint of an OpenAI-compatible API.

    Usage:
        embedder = EmbeddingClient(model="text-embedding-004")
        vector   = await embedder.embed_padded("hello")
    """
    def __init__(self, client=None, model: str = EMBEDDING_MODEL, dimension: int = EMBEDDING_DIMENSION):
        self.model = model
        self.dimension = dimension
        self.client = client or build_async_client()

    # back-off only on throttling (429); everything else surfaces immediately
    @backoff.on_exception(backoff.expo, openai.RateLimitError, max_tries=5)
    async def _create(self, text: str):
        return await self.client.embeddings.create(model=self.model, input=text)

    async def embed(self, text: str) -> list[float]:
        """Returns the raw embedding of *text* as produced by the service."""
        try:
            resp = await self._create(text)
        except openai.APIError as err:
            raise translate_openai_error(err) from err
        return list(resp.data[0].embedding)

    async def embed_padded(self, text: str) -> list[float]:
        values = await self.embed(text)
        padded = pad_vector(values, self.dimension)
        logger.debug("Original embedding dimensions: %d, padded to: %d", len(values), len(padded))
        return padded
