"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends

from better_qdrant.config import Settings, get_settings
from better_qdrant.embeddings.factory import create_embedding_provider
from better_qdrant.services.ingestion_service import IngestionService
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.services.search_service import SearchService
from better_qdrant.services.tool_service import ProviderFactory, ToolService

# Common dependencies that can be injected into route handlers
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Module-level cache for QdrantService singleton
_qdrant_service_cache: QdrantService | None = None


def get_qdrant_service(settings: SettingsDep) -> QdrantService:
    """Get or create a cached QdrantService instance.

    Returns:
        QdrantService instance.
    """
    global _qdrant_service_cache

    if _qdrant_service_cache is None:
        _qdrant_service_cache = QdrantService(settings)

    return _qdrant_service_cache


async def close_qdrant_service() -> None:
    """Close and forget the cached QdrantService, if one was created."""
    global _qdrant_service_cache

    if _qdrant_service_cache is not None:
        await _qdrant_service_cache.aclose()
        _qdrant_service_cache = None


QdrantServiceDep = Annotated[QdrantService, Depends(get_qdrant_service)]


def get_ingestion_service(
    settings: SettingsDep,
    qdrant_service: QdrantServiceDep,
) -> IngestionService:
    """Get an IngestionService bound to the shared Qdrant client."""
    return IngestionService(settings, qdrant_service)


def get_search_service(
    settings: SettingsDep,
    qdrant_service: QdrantServiceDep,
) -> SearchService:
    """Get a SearchService bound to the shared Qdrant client."""
    return SearchService(settings, qdrant_service)


def get_provider_factory() -> ProviderFactory:
    """Return the factory used to build an embedding provider per request."""
    return create_embedding_provider


IngestionServiceDep = Annotated[IngestionService, Depends(get_ingestion_service)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
ProviderFactoryDep = Annotated[ProviderFactory, Depends(get_provider_factory)]


def get_tool_service(
    settings: SettingsDep,
    qdrant_service: QdrantServiceDep,
    ingestion_service: IngestionServiceDep,
    search_service: SearchServiceDep,
    provider_factory: ProviderFactoryDep,
) -> ToolService:
    """Get a ToolService wired to the request's services."""
    return ToolService(
        settings,
        qdrant_service,
        ingestion_service,
        search_service,
        provider_factory=provider_factory,
    )


ToolServiceDep = Annotated[ToolService, Depends(get_tool_service)]
