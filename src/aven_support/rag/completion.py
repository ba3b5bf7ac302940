import json
import logging
from typing import AsyncIterator

from langfuse.openai import openai

from aven_support.config import CHAT_MODEL, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from aven_support.core.llm_client import build_async_client, translate_openai_error

logger = logging.getLogger(__name__)

SSE_DONE = "data: [DONE]\n\n"


def _as_dict(obj) -> dict:
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", exclude_unset=True)
    return obj


def sse_frame(chunk) -> str:
    """Serialize one completion chunk as a Server-Sent-Events data frame."""
    return f"data: {json.dumps(_as_dict(chunk))}\n\n"


class CompletionForwarder:
    """Forwards a rewritten conversation to the hosted chat-completion model."""

    def __init__(self, client=None, model: str = CHAT_MODEL):
        self.model = model
        self.client = client or build_async_client()

    def _params(self, messages: list[dict], max_tokens, temperature) -> dict:
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": DEFAULT_TEMPERATURE if temperature is None else temperature,
        }

    async def complete(self, messages: list[dict], max_tokens=None, temperature=None) -> dict:
        """Non-streaming completion, returned verbatim as a plain dict."""
        logger.info("Creating non-streaming completion")
        try:
            completion = await self.client.chat.completions.create(
                **self._params(messages, max_tokens, temperature), stream=False
            )
        except openai.APIError as err:
            raise translate_openai_error(err) from err
        return _as_dict(completion)

    async def open_stream(self, messages: list[dict], max_tokens=None, temperature=None) -> AsyncIterator[str]:
        """Start an upstream stream and return an iterator of SSE frames.

        Opening the stream is awaited here so authentication and parameter
        errors are raised before any bytes reach the client.
        """
        logger.info("Creating streaming completion")
        try:
            upstream = await self.client.chat.completions.create(
                **self._params(messages, max_tokens, temperature), stream=True
            )
        except openai.APIError as err:
            raise translate_openai_error(err) from err
        return self._frames(upstream)

    async def _frames(self, upstream) -> AsyncIterator[str]:
        try:
            async for chunk in upstream:
                yield sse_frame(chunk)
        except Exception:
            logger.exception("Streaming error")
            raise
        yield SSE_DONE
