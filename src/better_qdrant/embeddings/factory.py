"""Factory mapping embedding service identifiers to providers."""

from __future__ import annotations

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import ConfigurationError
from better_qdrant.core.logging import get_logger
from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType
from better_qdrant.embeddings.local import FastEmbedEmbeddingProvider
from better_qdrant.embeddings.remote import (
    OllamaEmbeddingProvider,
    OpenAIEmbeddingProvider,
    OpenRouterEmbeddingProvider,
)

logger = get_logger(__name__)


def create_embedding_provider(
    service: EmbeddingServiceType | str,
    settings: Settings,
) -> EmbeddingProvider:
    """Build the provider selected by ``service`` from process settings.

    Args:
        service: One of the ``EmbeddingServiceType`` identifiers.
        settings: Settings carrying per-provider keys, endpoints and models.

    Returns:
        A configured provider. Remote models are built lazily on first call.

    Raises:
        ConfigurationError: Unknown identifier, missing API key, or a model
            whose vector size is unknown.
    """
    try:
        kind = EmbeddingServiceType(service)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in EmbeddingServiceType)
        raise ConfigurationError(
            f"Unknown embedding service '{service}'; expected one of: {allowed}"
        ) from exc

    common = {
        "timeout": settings.embedding_timeout,
        "batch_size": settings.embedding_batch_size,
    }

    provider: EmbeddingProvider
    match kind:
        case EmbeddingServiceType.OPENAI:
            provider = OpenAIEmbeddingProvider(
                api_key=settings.openai_api_key,
                endpoint=settings.openai_endpoint,
                model=settings.openai_model,
                vector_size=settings.openai_vector_size,
                **common,
            )
        case EmbeddingServiceType.OPENROUTER:
            provider = OpenRouterEmbeddingProvider(
                api_key=settings.openrouter_api_key,
                endpoint=settings.openrouter_endpoint,
                model=settings.openrouter_model,
                vector_size=settings.openrouter_vector_size,
                **common,
            )
        case EmbeddingServiceType.OLLAMA:
            provider = OllamaEmbeddingProvider(
                endpoint=settings.ollama_endpoint,
                model=settings.ollama_model,
                vector_size=settings.ollama_vector_size,
                **common,
            )
        case EmbeddingServiceType.FASTEMBED:
            provider = FastEmbedEmbeddingProvider(
                model=settings.fastembed_model,
                vector_size=settings.fastembed_vector_size,
                cache_dir=settings.fastembed_cache_dir,
                **common,
            )

    logger.debug("Created embedding provider %r", provider)
    return provider
