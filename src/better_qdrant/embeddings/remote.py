"""Embedding providers backed by an HTTP API."""

from __future__ import annotations

from typing import ClassVar

from llama_index.core.base.embeddings.base import BaseEmbedding
from llama_index.embeddings.ollama import OllamaEmbedding  # type: ignore
from llama_index.embeddings.openai import OpenAIEmbedding  # type: ignore
from llama_index.embeddings.openai_like import OpenAILikeEmbedding  # type: ignore

from better_qdrant.core.exceptions import ConfigurationError
from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType

_OPENAI_SIZES = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class RemoteEmbeddingProvider(EmbeddingProvider):
    """Provider that calls a hosted API, optionally at a custom endpoint."""

    requires_api_key: ClassVar[bool] = True
    default_endpoint: ClassVar[str | None] = None

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        model: str | None = None,
        vector_size: int | None = None,
        timeout: float = 60.0,
        batch_size: int = 100,
    ):
        if self.requires_api_key and not (api_key and api_key.strip()):
            env_name = f"{self.service_type.value.upper()}_API_KEY"
            raise ConfigurationError(
                f"{self.service_type.value} embedding service requires an API key; set {env_name}"
            )
        self.api_key = api_key
        self.endpoint = endpoint or self.default_endpoint
        super().__init__(model=model, vector_size=vector_size, timeout=timeout, batch_size=batch_size)


class OpenAIEmbeddingProvider(RemoteEmbeddingProvider):
    service_type = EmbeddingServiceType.OPENAI
    default_model = "text-embedding-3-small"
    known_vector_sizes = _OPENAI_SIZES

    def _build_model(self) -> BaseEmbedding:
        # Retries belong to the caller, not the SDK.
        if self.model_name not in _OPENAI_SIZES:
            # OpenAIEmbedding validates names against its model enum.
            return OpenAILikeEmbedding(
                model_name=self.model_name,
                api_key=self.api_key,
                api_base=self.endpoint,
                embed_batch_size=self.batch_size,
                timeout=self.timeout,
                max_retries=0,
            )
        return OpenAIEmbedding(
            api_key=self.api_key,
            api_base=self.endpoint,
            model=self.model_name,
            embed_batch_size=self.batch_size,
            timeout=self.timeout,
            max_retries=0,
        )


class OpenRouterEmbeddingProvider(RemoteEmbeddingProvider):
    """OpenAI-compatible gateway; model names carry a vendor prefix."""

    service_type = EmbeddingServiceType.OPENROUTER
    default_model = "openai/text-embedding-3-small"
    default_endpoint = "https://openrouter.ai/api/v1"
    known_vector_sizes = {f"openai/{name}": size for name, size in _OPENAI_SIZES.items()}

    def _build_model(self) -> BaseEmbedding:
        return OpenAILikeEmbedding(
            model_name=self.model_name,
            api_key=self.api_key,
            api_base=self.endpoint,
            embed_batch_size=self.batch_size,
            timeout=self.timeout,
            max_retries=0,
        )


class OllamaEmbeddingProvider(RemoteEmbeddingProvider):
    """Ollama server; runs models locally but is reached over HTTP."""

    service_type = EmbeddingServiceType.OLLAMA
    requires_api_key = False
    default_model = "nomic-embed-text"
    default_endpoint = "http://localhost:11434"
    known_vector_sizes = {
        "nomic-embed-text": 768,
        "mxbai-embed-large": 1024,
        "all-minilm": 384,
        "snowflake-arctic-embed": 1024,
        "bge-m3": 1024,
    }

    def _build_model(self) -> BaseEmbedding:
        return OllamaEmbedding(
            model_name=self.model_name,
            base_url=self.endpoint,
            embed_batch_size=self.batch_size,
        )
