from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, ValidationError

from aven_support.core.errors import RequestValidationError


class ChatCompletionRequest(BaseModel):
    """OpenAI-style chat-completions body; unknown fields are ignored.

    Generation parameters are passed to the model service as sent and
    are not type-checked here.
    """

    model_config = ConfigDict(extra="ignore")

    messages: List[Dict[str, Any]]
    max_tokens: Any = None
    temperature: Any = None
    stream: Any = False

    @property
    def query(self) -> str:
        return content_text(self.messages[-1].get("content"))


def content_text(content: Any) -> str:
    """Plain text of a message's content (string or list of content parts)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            part.get("text", "")
            for part in content
            if isinstance(part, dict) and part.get("type", "text") == "text"
        ]
        return "\n".join(p for p in parts if p)
    return "" if content is None else str(content)


def validate_chat_request(body: Any) -> ChatCompletionRequest:
    """Reject malformed bodies before any external call is made."""
    if not isinstance(body, dict):
        raise RequestValidationError("Request body must be a JSON object")

    messages = body.get("messages")
    if not messages or not isinstance(messages, list):
        raise RequestValidationError("Messages array is required and must not be empty")

    last_message = messages[-1]
    if not isinstance(last_message, dict) or not last_message.get("content"):
        raise RequestValidationError("Last message must have content")

    try:
        return ChatCompletionRequest.model_validate(body)
    except ValidationError as err:
        raise RequestValidationError(f"Invalid request parameters: {err.errors()[0]['msg']}") from err
