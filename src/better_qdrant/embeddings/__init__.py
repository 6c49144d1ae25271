"""Pluggable embedding providers."""

from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType
from better_qdrant.embeddings.factory import create_embedding_provider
from better_qdrant.embeddings.local import FastEmbedEmbeddingProvider
from better_qdrant.embeddings.remote import (
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
    OpenRouterEmbeddingProvider,
    RemoteEmbeddingProvider,
)

__all__ = [
    # Contract
    "EmbeddingProvider",
    "EmbeddingServiceType",
    "create_embedding_provider",
    # Remote
    "RemoteEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "OpenRouterEmbeddingProvider",
    "OllamaEmbeddingProvider",
    # Local
    "FastEmbedEmbeddingProvider",
]
