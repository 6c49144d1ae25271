"""Unit tests for the ingestion service."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import DocumentReadError, EmbeddingProviderError
from better_qdrant.services.ingestion_service import IngestionService, read_document
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.text_processing.chunker import ChunkSettings
from conftest import FAKE_DIM, FakeEmbeddingProvider

pytestmark = pytest.mark.asyncio


@pytest.fixture
def ingestion_service(test_settings: Settings, qdrant_service: QdrantService) -> IngestionService:
    return IngestionService(test_settings, qdrant_service)


def _text(length: int) -> str:
    words = "qdrant stores vectors with payloads and searches them by cosine similarity "
    return (words * (length // len(words) + 1))[:length]


async def test_ingest_creates_collection_and_stores_every_chunk(
    ingestion_service: IngestionService,
    qdrant_service: QdrantService,
    fake_provider: FakeEmbeddingProvider,
) -> None:
    stats = await ingestion_service.ingest(
        content=_text(1000),
        source="guide.txt",
        collection="docs",
        provider=fake_provider,
        chunk_settings=ChunkSettings(chunk_size=300, chunk_overlap=50),
    )

    assert stats.chunks == 4
    assert stats.points == 4
    assert stats.vector_size == FAKE_DIM
    assert stats.collection_created is True
    assert await qdrant_service.get_vector_size("docs") == FAKE_DIM

    count = await qdrant_service.aclient.count("docs", exact=True)
    assert count.count == 4


async def test_ingest_payload_contains_text_and_metadata(
    ingestion_service: IngestionService,
    qdrant_service: QdrantService,
    fake_provider: FakeEmbeddingProvider,
) -> None:
    await ingestion_service.ingest(
        content=_text(450),
        source="guide.txt",
        collection="docs",
        provider=fake_provider,
        chunk_settings=ChunkSettings(chunk_size=200, chunk_overlap=25),
    )

    records, _ = await qdrant_service.aclient.scroll("docs", limit=10, with_payload=True)
    payloads = sorted((r.payload or {} for r in records), key=lambda p: p["chunk_index"])

    assert [p["chunk_index"] for p in payloads] == [0, 1, 2]
    assert {p["source"] for p in payloads} == {"guide.txt"}
    assert payloads[0]["text"] == _text(450)[:200]
    assert payloads[1]["start_char"] == 175


async def test_ingest_uses_chunker_defaults_from_settings(
    ingestion_service: IngestionService,
    fake_provider: FakeEmbeddingProvider,
) -> None:
    # test_settings: chunk_size=200, chunk_overlap=20
    stats = await ingestion_service.ingest(_text(560), "a.txt", "docs", fake_provider)
    assert stats.chunks == 3


async def test_ingest_into_existing_collection_does_not_recreate(
    ingestion_service: IngestionService,
    qdrant_service: QdrantService,
    fake_provider: FakeEmbeddingProvider,
) -> None:
    await qdrant_service.create_collection("docs", FAKE_DIM)

    stats = await ingestion_service.ingest(_text(100), "a.txt", "docs", fake_provider)

    assert stats.collection_created is False
    assert stats.points == 1


async def test_empty_document_makes_no_calls(test_settings: Settings) -> None:
    qdrant_service = AsyncMock(spec=QdrantService)
    provider = FakeEmbeddingProvider()
    service = IngestionService(test_settings, qdrant_service)

    stats = await service.ingest("", "empty.txt", "docs", provider)

    assert stats.chunks == 0
    assert stats.points == 0
    assert not provider.is_loaded
    qdrant_service.ensure_collection.assert_not_awaited()
    qdrant_service.upsert_points.assert_not_awaited()


async def test_embedding_failure_stops_before_storage(test_settings: Settings) -> None:
    qdrant_service = AsyncMock(spec=QdrantService)
    provider = FakeEmbeddingProvider()
    provider.generate_embeddings = AsyncMock(side_effect=EmbeddingProviderError("boom"))
    service = IngestionService(test_settings, qdrant_service)

    with pytest.raises(EmbeddingProviderError):
        await service.ingest(_text(300), "a.txt", "docs", provider)

    qdrant_service.ensure_collection.assert_not_awaited()
    qdrant_service.upsert_points.assert_not_awaited()


async def test_ingest_file_uses_path_as_source(
    ingestion_service: IngestionService,
    qdrant_service: QdrantService,
    fake_provider: FakeEmbeddingProvider,
    tmp_path: Path,
) -> None:
    doc = tmp_path / "notes.txt"
    doc.write_text("Qdrant is a vector database.", encoding="utf-8")

    stats = await ingestion_service.ingest_file(str(doc), "notes", fake_provider)

    assert stats.source == str(doc)
    assert stats.points == 1
    records, _ = await qdrant_service.aclient.scroll("notes", limit=1, with_payload=True)
    assert records[0].payload["source"] == str(doc)  # type: ignore[index]


async def test_read_document_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError, match="File not found"):
        await read_document(str(tmp_path / "missing.txt"))


async def test_read_document_rejects_non_utf8(tmp_path: Path) -> None:
    doc = tmp_path / "binary.bin"
    doc.write_bytes(b"\xff\xfe\x00\x81")

    with pytest.raises(DocumentReadError, match="Could not read"):
        await read_document(str(doc))
