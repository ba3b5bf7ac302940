from langfuse.openai import openai

from aven_support.config import CHAT_BASE_URL, GOOGLE_API_KEY, PLACEHOLDER_API_KEY
from aven_support.core.errors import AssistantError, UpstreamError, from_status


def build_async_client(
    api_key: str | None = None,
    base_url: str = CHAT_BASE_URL,
    http_client=None,
) -> openai.AsyncOpenAI:
    """AsyncOpenAI client pointed at Gemini's OpenAI-compatible endpoint."""
    # The SDK refuses to construct without a key, so an unset one is replaced
    # by a placeholder that the service rejects on the first request.
    return openai.AsyncOpenAI(
        api_key=api_key or GOOGLE_API_KEY or PLACEHOLDER_API_KEY,
        base_url=base_url,
        http_client=http_client,
    )


def translate_openai_error(err: Exception) -> AssistantError:
    """Map an openai SDK exception onto the package's typed errors."""
    if isinstance(err, openai.APIStatusError):
        return from_status(err.status_code, str(err))
    return UpstreamError(str(err))
