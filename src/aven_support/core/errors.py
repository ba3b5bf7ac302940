"""Typed errors shared by the adapters, the pipelines and the HTTP layer.

Every error the API can surface carries its own ``status_code`` so the
FastAPI exception handler never has to inspect message text.
"""


class AssistantError(Exception):
    """Base class for every error raised by this package."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestValidationError(AssistantError):
    """Inbound request body has the wrong shape."""

    status_code = 400


class UpstreamAuthError(AssistantError):
    """A hosted service rejected our credentials."""

    status_code = 401


class UpstreamBadRequestError(AssistantError):
    """A hosted service rejected the request parameters."""

    status_code = 400


class UpstreamError(AssistantError):
    """Any other failure talking to a hosted service."""

    status_code = 500


class ServiceUnavailableError(AssistantError):
    """The service is not ready to answer requests."""

    status_code = 503


class InternalError(AssistantError):
    """Unclassified failure inside the service."""


class EmbeddingDimensionError(AssistantError):
    """Embedding is longer than the index dimension and cannot be padded."""


class IndexConfigurationError(AssistantError):
    """The vector index does not match the configured dimension."""


class IngestionError(AssistantError):
    """The ingestion batch cannot continue."""


def from_status(status: int | None, message: str) -> AssistantError:
    """Pick the error type for an upstream HTTP status code."""
    if status == 401:
        return UpstreamAuthError(message)
    if status == 400:
        return UpstreamBadRequestError(message)
    return UpstreamError(message)
