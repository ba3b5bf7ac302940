"""
Shared test fixtures and fakes for the whole suite.

Provides: fake embedder, fake vector store, fake chat client, fake clock
for the rate limiter. No test talks to a hosted service or sleeps.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from pinecone.exceptions import PineconeApiException

from aven_support.core.rate_limit import RateLimiter
from aven_support.core.schema import RetrievalMatch


class FakeEmbedder:
    """Returns a fixed small vector and records every text it embedded."""

    def __init__(self, vector=None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.texts = []

    async def embed_padded(self, text: str) -> list[float]:
        self.texts.append(text)
        return list(self.vector)


class PineconeStatusError(PineconeApiException):
    """Pinecone API error carrying its HTTP status under a chosen attribute.

    SDK releases disagree on the attribute name (`status_code` or `status`)
    and on the constructor, so the base initializer is bypassed.
    """

    def __init__(self, message: str, status_code=None, status=None):
        Exception.__init__(self, message)
        self._status_code = status_code
        self._status = status

    @property
    def status_code(self):
        return self._status_code

    @property
    def status(self):
        return self._status

    def __str__(self) -> str:
        return self.args[0]


class FakeVectorStore:
    """In-memory stand-in for PineconeVectorStore."""

    namespace = "test-namespace"

    def __init__(self, matches=None):
        self.matches = matches or []
        self.records = []
        self.queries = []

    def upsert_record(self, record) -> None:
        self.records.append(record)

    def query_vectors(self, query_embedding, top_k):
        self.queries.append((query_embedding, top_k))
        return list(self.matches)


class FakeStream:
    """Async-iterable upstream stream, optionally failing after its chunks."""

    def __init__(self, chunks, error=None):
        self.chunks = chunks
        self.error = error

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


class FakeClock:
    """Monotonic clock that only moves when the fake sleep is awaited."""

    def __init__(self):
        self.now = 1000.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_chat_client(create_result=None, side_effect=None) -> SimpleNamespace:
    """Object shaped like AsyncOpenAI with an AsyncMock chat.completions.create."""
    create = AsyncMock(return_value=create_result, side_effect=side_effect)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def sample_matches() -> list[RetrievalMatch]:
    """Two matches straddling the default 0.5 threshold."""
    return [
        RetrievalMatch(id="m1", score=0.9, metadata={"text": "Aven cards earn 2% cashback."}),
        RetrievalMatch(id="m2", score=0.3, metadata={"text": "Unrelated careers page."}),
    ]


@pytest.fixture
def fake_vector_store(sample_matches) -> FakeVectorStore:
    return FakeVectorStore(matches=sample_matches)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock: FakeClock) -> RateLimiter:
    return RateLimiter(min_interval=6.0, sleep=fake_clock.sleep, clock=fake_clock)


@pytest.fixture
def sample_completion() -> dict:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gemini-1.5-flash",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": "You earn 2% cashback."},
            }
        ],
    }
