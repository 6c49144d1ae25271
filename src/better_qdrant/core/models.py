"""Domain models for chunks and vector store results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ChunkMetadata:
    """Positional metadata attached to every chunk."""

    source: str
    chunk_index: int
    start_char: int
    end_char: int


@dataclass(frozen=True)
class Chunk:
    """A bounded, contiguous slice of a document."""

    text: str
    metadata: ChunkMetadata


@dataclass(slots=True)
class SearchResult:
    """A scored match returned by the vector store."""

    id: Any
    score: float
    payload: dict[str, Any] = field(default_factory=dict)
    vector: list[float] | None = None
