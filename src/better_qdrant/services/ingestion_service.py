"""Ingestion service: chunk, embed, and store documents."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from better_qdrant.adapters import qdrant_mapper
from better_qdrant.config import Settings
from better_qdrant.core.exceptions import DocumentReadError
from better_qdrant.core.logging import get_logger
from better_qdrant.embeddings.base import EmbeddingProvider
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.text_processing.chunker import ChunkSettings, Chunker

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestionStats:
    """Outcome of one ingestion call."""

    collection: str
    source: str
    chunks: int
    points: int
    vector_size: int
    collection_created: bool = False


class IngestionService:
    """Turns raw text into points in a Qdrant collection.

    The upsert is a single request; callers see success or one failure for
    the whole document, never a partial count.
    """

    def __init__(
        self,
        settings: Settings,
        qdrant_service: QdrantService,
        chunker: Chunker | None = None,
    ):
        self.settings = settings
        self.qdrant_service = qdrant_service
        self.chunker = chunker or Chunker(ChunkSettings.from_settings(settings))

    async def ingest(
        self,
        content: str,
        source: str,
        collection: str,
        provider: EmbeddingProvider,
        chunk_settings: ChunkSettings | None = None,
    ) -> IngestionStats:
        """Chunk ``content``, embed the chunks, and upsert them into ``collection``.

        Args:
            content: Document text.
            source: Label stored with every chunk (usually the file path).
            collection: Target collection, created on demand with the
                provider's vector size.
            provider: Embedding provider for the chunk texts.
            chunk_settings: Per-call window settings; the chunker's defaults
                apply when omitted.

        Returns:
            IngestionStats with ``points == chunks``.
        """
        chunks = self.chunker.split(content, source, chunk_settings)
        if not chunks:
            logger.info("No content to ingest from '%s'", source)
            return IngestionStats(
                collection=collection,
                source=source,
                chunks=0,
                points=0,
                vector_size=provider.vector_size,
            )

        logger.info(
            "Ingesting %d chunks from '%s' into '%s' with %s",
            len(chunks),
            source,
            collection,
            provider.service_type.value,
        )

        embeddings = await provider.generate_embeddings([chunk.text for chunk in chunks])

        created = await self.qdrant_service.ensure_collection(collection, provider.vector_size)

        points = qdrant_mapper.chunks_to_points(chunks, embeddings)
        await self.qdrant_service.upsert_points(collection, points)

        logger.info("Stored %d points in '%s'", len(points), collection)
        return IngestionStats(
            collection=collection,
            source=source,
            chunks=len(chunks),
            points=len(points),
            vector_size=provider.vector_size,
            collection_created=created,
        )

    async def ingest_file(
        self,
        file_path: str,
        collection: str,
        provider: EmbeddingProvider,
        chunk_settings: ChunkSettings | None = None,
    ) -> IngestionStats:
        """Read a UTF-8 file and ingest it with the path as its source."""
        content = await read_document(file_path)
        return await self.ingest(
            content=content,
            source=file_path,
            collection=collection,
            provider=provider,
            chunk_settings=chunk_settings,
        )


async def read_document(file_path: str) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    path = Path(file_path).expanduser()
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentReadError(f"File not found: {file_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(f"Could not read {file_path}: {exc}") from exc
