"""Character-window chunking with fixed overlap."""

from __future__ import annotations

from dataclasses import dataclass

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import ConfigurationError
from better_qdrant.core.logging import get_logger
from better_qdrant.core.models import Chunk, ChunkMetadata

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


@dataclass(frozen=True)
class ChunkSettings:
    """Window size and overlap, both measured in characters."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise ConfigurationError(
                f"chunk_overlap must not be negative, got {self.chunk_overlap}"
            )
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )

    @property
    def step(self) -> int:
        """Distance between the starts of two adjacent windows."""
        return self.chunk_size - self.chunk_overlap

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> ChunkSettings:
        """Build settings from app defaults, letting explicit values win."""
        return cls(
            chunk_size=chunk_size if chunk_size is not None else settings.chunk_size,
            chunk_overlap=chunk_overlap if chunk_overlap is not None else settings.chunk_overlap,
        )


def split_text(text: str, source: str, settings: ChunkSettings | None = None) -> list[Chunk]:
    """Split text into overlapping windows.

    Window ``i + 1`` starts ``chunk_size - chunk_overlap`` characters after
    window ``i``, so adjacent chunks share exactly ``chunk_overlap`` characters.
    The final window always ends at the end of the text.

    Args:
        text: Raw document text.
        source: Label stored in each chunk's metadata.
        settings: Window configuration; defaults to ``ChunkSettings()``.

    Returns:
        Chunks in document order. Empty text yields no chunks.
    """
    settings = settings or ChunkSettings()
    length = len(text)
    chunks: list[Chunk] = []

    start = 0
    while start < length:
        end = min(start + settings.chunk_size, length)
        chunks.append(
            Chunk(
                text=text[start:end],
                metadata=ChunkMetadata(
                    source=source,
                    chunk_index=len(chunks),
                    start_char=start,
                    end_char=end,
                ),
            )
        )
        if end >= length:
            break
        start += settings.step

    logger.debug(
        "Split %d chars from '%s' into %d chunks (size=%d, overlap=%d)",
        length,
        source,
        len(chunks),
        settings.chunk_size,
        settings.chunk_overlap,
    )
    return chunks


class Chunker:
    """Holds default chunk settings; each call may pass its own."""

    def __init__(self, default_settings: ChunkSettings | None = None):
        self.default_settings = default_settings or ChunkSettings()

    def split(
        self,
        text: str,
        source: str,
        settings: ChunkSettings | None = None,
    ) -> list[Chunk]:
        return split_text(text, source, settings or self.default_settings)
