import asyncio
import logging
from numbers import Real

from aven_support.config import MIN_SIMILARITY_SCORE, RETRIEVAL_TOP_K
from aven_support.core.schema import RetrievalMatch

logger = logging.getLogger(__name__)


def passes_threshold(match: RetrievalMatch, min_score: float) -> bool:
    # Matches without a numeric score are kept.
    if not isinstance(match.score, Real):
        return True
    return match.score >= min_score


def build_context(matches: list[RetrievalMatch]) -> str:
    """Join the chunk text of *matches*, in order, separated by a blank line."""
    return "\n\n".join(match.text for match in matches)


class Retriever:
    """Embeds a query and pulls the closest chunks out of the vector store."""

    def __init__(self, embedder, vector_store, top_k: int = RETRIEVAL_TOP_K, min_score: float = MIN_SIMILARITY_SCORE):
        self.embedder = embedder
        self.vector_store = vector_store
        self.top_k = top_k
        self.min_score = min_score

    async def retrieve(self, query: str) -> list[RetrievalMatch]:
        vector = await self.embedder.embed_padded(query)
        matches = await asyncio.to_thread(self.vector_store.query_vectors, vector, self.top_k)
        kept = [m for m in matches if passes_threshold(m, self.min_score)]
        logger.info("Kept %d of %d matches at min score %.2f", len(kept), len(matches), self.min_score)
        return kept

    async def retrieve_context(self, query: str) -> str:
        context = build_context(await self.retrieve(query))
        if not context:
            logger.info("No context passed the threshold; answering without grounding.")
        return context
