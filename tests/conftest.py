# conftest.py
import math
import zlib

import pytest
import pytest_asyncio
from llama_index.core.base.embeddings.base import BaseEmbedding
from qdrant_client import AsyncQdrantClient

from better_qdrant.config import Settings
from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType
from better_qdrant.services.qdrant_service import QdrantService

FAKE_DIM = 64


# ---------- Fake embedding so tests never call external APIs ----------
class HashingEmbedding(BaseEmbedding):
    """Bag of character trigrams hashed into a fixed-size, L2-normalized vector.

    Identical texts get identical vectors; unrelated texts land far apart.
    """

    dim: int = FAKE_DIM

    def _vector(self, text: str) -> list[float]:
        vec = [0.0] * self.dim
        padded = f"  {text.lower()}  "
        for i in range(len(padded) - 2):
            bucket = zlib.crc32(padded[i : i + 3].encode("utf-8")) % self.dim
            vec[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vec)) or 1.0
        return [v / norm for v in vec]

    def _get_text_embedding(self, text: str):
        return self._vector(text)

    async def _aget_text_embedding(self, text: str):
        return self._vector(text)

    def _get_query_embedding(self, query: str):
        return self._vector(query)

    async def _aget_query_embedding(self, query: str):
        return self._vector(query)


class FakeEmbeddingProvider(EmbeddingProvider):
    service_type = EmbeddingServiceType.FASTEMBED
    default_model = "fake-hashing"
    known_vector_sizes = {"fake-hashing": FAKE_DIM}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.builds = 0

    def _build_model(self) -> BaseEmbedding:
        self.builds += 1
        return HashingEmbedding()


def fake_provider_factory(service, settings) -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest_asyncio.fixture
async def aclient_local():
    """In-memory embedded Qdrant for tests."""
    client = AsyncQdrantClient(location=":memory:")
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        qdrant_url="http://unused-in-local-mode",
        qdrant_api_key=None,
        qdrant_prefer_grpc=False,
        chunk_size=200,
        chunk_overlap=20,
        search_limit=5,
        openai_api_key=None,
        openrouter_api_key=None,
    )


@pytest_asyncio.fixture
async def qdrant_service(
    aclient_local: AsyncQdrantClient,
    test_settings: Settings,
):
    svc = QdrantService(settings=test_settings, aclient=aclient_local)
    yield svc
