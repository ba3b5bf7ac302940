from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Document:
    url: str
    markdown: str
    fetched_at: datetime


@dataclass(frozen=True)
class Chunk:
    index: int
    start: int           # character offset into the combined text
    end: int
    text: str
    batch_id: str

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class IndexRecord:
    id: str
    values: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_pinecone(self) -> dict:
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


@dataclass(frozen=True)
class RetrievalMatch:
    id: str
    score: Optional[float]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return str(self.metadata.get("text", ""))
