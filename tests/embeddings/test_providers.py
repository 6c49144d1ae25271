"""Tests for embedding providers and the provider factory."""

from __future__ import annotations

import asyncio

import pytest
from llama_index.core.base.embeddings.base import BaseEmbedding
from llama_index.embeddings.openai import OpenAIEmbedding  # type: ignore
from llama_index.embeddings.openai_like import OpenAILikeEmbedding  # type: ignore

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import ConfigurationError, EmbeddingProviderError
from better_qdrant.embeddings import (
    EmbeddingServiceType,
    FastEmbedEmbeddingProvider,
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
    OpenRouterEmbeddingProvider,
    create_embedding_provider,
)
from conftest import FAKE_DIM, FakeEmbeddingProvider, HashingEmbedding


class _WrongSizeEmbedding(HashingEmbedding):
    def _vector(self, text: str) -> list[float]:
        return [0.1] * (self.dim - 1)


class _FailingEmbedding(HashingEmbedding):
    async def _aget_text_embedding(self, text: str):
        raise ConnectionError("connection refused")


class _SlowEmbedding(HashingEmbedding):
    async def _aget_text_embedding(self, text: str):
        await asyncio.sleep(5)
        return self._vector(text)


class _ProviderWith(FakeEmbeddingProvider):
    model_cls: type[BaseEmbedding] = HashingEmbedding

    def _build_model(self) -> BaseEmbedding:
        self.builds += 1
        return self.model_cls()


class _SlowLoadingProvider(FakeEmbeddingProvider):
    async def _load_model(self) -> BaseEmbedding:
        await asyncio.sleep(0.05)
        return self._build_model()


class _FlakyLoadingProvider(FakeEmbeddingProvider):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.attempts = 0

    async def _load_model(self) -> BaseEmbedding:
        self.attempts += 1
        if self.attempts == 1:
            raise OSError("model download interrupted")
        return self._build_model()


def _settings(**overrides) -> Settings:
    values = {
        "openai_api_key": None,
        "openrouter_api_key": None,
        "openai_model": None,
        "openrouter_model": None,
        "ollama_model": None,
        "fastembed_model": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_embeddings_preserve_order_and_size(fake_provider: FakeEmbeddingProvider) -> None:
    texts = ["alpha", "beta", "gamma", "alpha"]
    vectors = await fake_provider.generate_embeddings(texts)

    assert len(vectors) == len(texts)
    assert all(len(vector) == fake_provider.vector_size == FAKE_DIM for vector in vectors)
    assert vectors[0] == vectors[3]
    assert vectors[0] != vectors[1]

    model = await fake_provider.get_model()
    assert vectors[2] == await model.aget_text_embedding("gamma")


@pytest.mark.asyncio
async def test_empty_input_does_not_load_model(fake_provider: FakeEmbeddingProvider) -> None:
    assert await fake_provider.generate_embeddings([]) == []
    assert not fake_provider.is_loaded


@pytest.mark.asyncio
async def test_model_is_built_once_for_concurrent_first_callers() -> None:
    provider = _SlowLoadingProvider()
    assert not provider.is_loaded

    await asyncio.gather(*(provider.generate_embeddings([f"text {i}"]) for i in range(5)))

    assert provider.builds == 1
    assert provider.is_loaded


@pytest.mark.asyncio
async def test_wrong_vector_length_raises() -> None:
    provider = _ProviderWith()
    provider.model_cls = _WrongSizeEmbedding

    with pytest.raises(EmbeddingProviderError, match="expected 64"):
        await provider.generate_embeddings(["hello"])


@pytest.mark.asyncio
async def test_backend_failure_is_wrapped() -> None:
    provider = _ProviderWith()
    provider.model_cls = _FailingEmbedding

    with pytest.raises(EmbeddingProviderError, match="connection refused") as exc_info:
        await provider.generate_embeddings(["hello"])
    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_timeout_is_reported_as_provider_error() -> None:
    provider = _ProviderWith(timeout=0.05)
    provider.model_cls = _SlowEmbedding

    with pytest.raises(EmbeddingProviderError, match="timed out"):
        await provider.generate_embeddings(["hello"])


def test_openai_requires_api_key() -> None:
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        OpenAIEmbeddingProvider(api_key=None)
    with pytest.raises(ConfigurationError):
        OpenAIEmbeddingProvider(api_key="   ")


def test_openrouter_requires_api_key() -> None:
    with pytest.raises(ConfigurationError, match="OPENROUTER_API_KEY"):
        OpenRouterEmbeddingProvider(api_key="")


def test_remote_defaults() -> None:
    openai = OpenAIEmbeddingProvider(api_key="sk-test")
    assert openai.model_name == "text-embedding-3-small"
    assert openai.vector_size == 1536
    assert openai.endpoint is None

    openrouter = OpenRouterEmbeddingProvider(api_key="or-test")
    assert openrouter.endpoint == "https://openrouter.ai/api/v1"
    assert openrouter.vector_size == 1536

    ollama = OllamaEmbeddingProvider()
    assert ollama.endpoint == "http://localhost:11434"
    assert ollama.vector_size == 768


def test_vector_size_known_without_loading_model() -> None:
    provider = FastEmbedEmbeddingProvider()
    assert provider.model_name == "BAAI/bge-small-en"
    assert provider.vector_size == 384
    assert not provider.is_loaded


def test_unknown_model_needs_vector_size() -> None:
    with pytest.raises(ConfigurationError, match="OLLAMA_VECTOR_SIZE"):
        OllamaEmbeddingProvider(model="custom-embedder")

    provider = OllamaEmbeddingProvider(model="custom-embedder", vector_size=512)
    assert provider.vector_size == 512


def test_non_positive_vector_size_rejected() -> None:
    with pytest.raises(ConfigurationError):
        FastEmbedEmbeddingProvider(vector_size=0)


@pytest.mark.parametrize(
    ("service", "expected_cls"),
    [
        ("openai", OpenAIEmbeddingProvider),
        ("openrouter", OpenRouterEmbeddingProvider),
        ("ollama", OllamaEmbeddingProvider),
        (EmbeddingServiceType.FASTEMBED, FastEmbedEmbeddingProvider),
    ],
)
def test_factory_builds_each_service(service, expected_cls) -> None:
    settings = _settings(openai_api_key="sk-test", openrouter_api_key="or-test")
    provider = create_embedding_provider(service, settings)
    assert isinstance(provider, expected_cls)


def test_factory_passes_configuration_through() -> None:
    settings = _settings(
        openai_api_key="sk-test",
        openai_endpoint="https://gateway.example/v1",
        openai_model="text-embedding-3-large",
        embedding_timeout=5.0,
    )
    provider = create_embedding_provider("openai", settings)

    assert isinstance(provider, OpenAIEmbeddingProvider)
    assert provider.endpoint == "https://gateway.example/v1"
    assert provider.vector_size == 3072
    assert provider.timeout == 5.0


def test_factory_missing_key_fails_fast() -> None:
    with pytest.raises(ConfigurationError, match="API key"):
        create_embedding_provider("openai", _settings())


def test_factory_rejects_unknown_service() -> None:
    with pytest.raises(ConfigurationError, match="Unknown embedding service 'cohere'"):
        create_embedding_provider("cohere", _settings())


@pytest.mark.asyncio
async def test_timed_out_first_load_is_reused_by_next_call() -> None:
    provider = _SlowLoadingProvider(timeout=0.01)

    with pytest.raises(EmbeddingProviderError, match="timed out"):
        await provider.generate_embeddings(["first"])
    assert not provider.is_loaded

    provider.timeout = 5.0
    vectors = await provider.generate_embeddings(["second"])

    assert len(vectors) == 1
    assert provider.builds == 1


@pytest.mark.asyncio
async def test_failed_load_is_retried() -> None:
    provider = _FlakyLoadingProvider()

    with pytest.raises(EmbeddingProviderError, match="model download interrupted"):
        await provider.generate_embeddings(["first"])

    assert len(await provider.generate_embeddings(["second"])) == 1
    assert provider.attempts == 2
    assert provider.builds == 1


@pytest.mark.asyncio
async def test_openai_known_model_uses_openai_client() -> None:
    provider = OpenAIEmbeddingProvider(api_key="sk-test", model="text-embedding-3-large")

    model = await provider.get_model()

    assert type(model) is OpenAIEmbedding
    assert model.model_name == "text-embedding-3-large"


@pytest.mark.asyncio
async def test_openai_custom_model_with_vector_size_is_usable() -> None:
    provider = OpenAIEmbeddingProvider(
        api_key="sk-test",
        endpoint="http://127.0.0.1:9/v1",
        model="my-gateway-embedding",
        vector_size=1024,
    )

    model = await provider.get_model()

    assert isinstance(model, OpenAILikeEmbedding)
    assert model.model_name == "my-gateway-embedding"
    assert model.api_base == "http://127.0.0.1:9/v1"
    assert provider.vector_size == 1024
