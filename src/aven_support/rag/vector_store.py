import logging

from pinecone import Pinecone
from pinecone.exceptions import PineconeApiException

from aven_support import config
from aven_support.core.errors import IndexConfigurationError, from_status
from aven_support.core.schema import IndexRecord, RetrievalMatch

logger = logging.getLogger(__name__)


class PineconeVectorStore:
    """
    Manages Pinecone index operations: dimension check, upserting and querying.
    This class centralizes all direct interactions with the Pinecone vector database.
    The SDK is synchronous; async callers go through ``asyncio.to_thread``.
    """

    def __init__(
        self,
        index=None,
        index_name: str = config.PINECONE_INDEX_NAME,
        namespace: str = config.PINECONE_NAMESPACE,
        host: str | None = config.PINECONE_HOST,
        dimension: int = config.EMBEDDING_DIMENSION,
    ):
        self.index_name = index_name
        self.namespace = namespace
        self.dimension = dimension
        self.host = host
        self._index = index

    @property
    def index(self):
        """Pinecone index handle, connected on first use."""
        if self._index is None:
            self._index = self._connect(self.host)
        return self._index

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _connect(self, host: str | None):
        pc = Pinecone(api_key=config.PINECONE_API_KEY or config.PLACEHOLDER_API_KEY)
        try:
            if host:
                logger.info("Connecting to Pinecone index '%s' at %s", self.index_name, host)
                return pc.Index(self.index_name, host=host)
            # Without a host the SDK resolves it through the control plane.
            logger.info("Connecting to Pinecone index '%s'", self.index_name)
            return pc.Index(self.index_name)
        except PineconeApiException as err:
            self._raise_upstream(err)

    @staticmethod
    def _raise_upstream(err: PineconeApiException):
        # Recent SDK releases expose `status_code`; older ones `status`.
        status = getattr(err, "status_code", None) or getattr(err, "status", None)
        raise from_status(status, f"Pinecone error: {err}") from err

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_dimension(self) -> None:
        """Fail fast if the live index was created with another dimension."""
        try:
            stats = self.index.describe_index_stats()
        except PineconeApiException as err:
            self._raise_upstream(err)
        actual = getattr(stats, "dimension", None)
        if actual is None and isinstance(stats, dict):
            actual = stats.get("dimension")
        if actual is not None and int(actual) != self.dimension:
            raise IndexConfigurationError(
                f"Index '{self.index_name}' has dimension {actual}, expected {self.dimension}"
            )
        logger.info("Pinecone index '%s' dimension %s verified.", self.index_name, actual)

    def upsert_record(self, record: IndexRecord) -> None:
        """Write a single record into the configured namespace."""
        try:
            self.index.upsert(vectors=[record.to_pinecone()], namespace=self.namespace)
        except PineconeApiException as err:
            self._raise_upstream(err)

    def query_vectors(self, query_embedding: list[float], top_k: int) -> list[RetrievalMatch]:
        """Nearest records with metadata, in the order Pinecone returns them."""
        if not query_embedding:
            logger.warning("Query embedding is empty. Cannot perform query.")
            return []

        logger.info("Querying Pinecone index '%s' with top_k=%d", self.index_name, top_k)
        try:
            response = self.index.query(
                vector=query_embedding,
                top_k=top_k,
                include_metadata=True,
                namespace=self.namespace,
            )
        except PineconeApiException as err:
            self._raise_upstream(err)

        matches = [
            RetrievalMatch(
                id=match.id,
                score=match.score,
                metadata=dict(match.metadata or {}),
            )
            for match in (response.matches or [])
        ]
        logger.info("Retrieved %d matches from Pinecone.", len(matches))
        return matches
