import logging
from typing import AsyncIterator

from aven_support.rag.completion import CompletionForwarder
from aven_support.rag.prompts import PromptBuilder
from aven_support.rag.request_validator import ChatCompletionRequest
from aven_support.rag.retriever import Retriever

logger = logging.getLogger(__name__)


class RagPipeline:
    """
    Per-request query pipeline: retrieve context for the last message,
    rewrite it into a grounded prompt, and forward the conversation.
    Every run re-embeds and re-queries; nothing is cached between requests.
    """
    def __init__(self, retriever: Retriever, forwarder: CompletionForwarder, prompt_builder: PromptBuilder | None = None):
        self.retriever = retriever
        self.forwarder = forwarder
        self.prompt_builder = prompt_builder or PromptBuilder()
        logger.info("RagPipeline initialized (top_k=%d, min_score=%.2f).", retriever.top_k, retriever.min_score)

    async def augment(self, request: ChatCompletionRequest) -> list[dict]:
        """Returns the request's messages with the last one grounded in retrieved context."""
        query = request.query
        logger.info("Creating prompt enhancement (messages=%d)", len(request.messages))
        context = await self.retriever.retrieve_context(query)
        return self.prompt_builder.build(request.messages, context, query)

    async def answer(self, request: ChatCompletionRequest) -> dict:
        messages = await self.augment(request)
        return await self.forwarder.complete(messages, request.max_tokens, request.temperature)

    async def answer_stream(self, request: ChatCompletionRequest) -> AsyncIterator[str]:
        """Opens the upstream stream and returns its SSE frames."""
        messages = await self.augment(request)
        return await self.forwarder.open_stream(messages, request.max_tokens, request.temperature)
