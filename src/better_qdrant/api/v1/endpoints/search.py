"""Search endpoint for dense similarity search."""

from fastapi import APIRouter, status

from better_qdrant.core.logging import get_logger
from better_qdrant.dependencies import ProviderFactoryDep, SearchServiceDep, SettingsDep
from better_qdrant.schemas.search import SearchRequest, SearchResponse

logger = get_logger(__name__)

router = APIRouter(tags=["search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Similarity Search",
    description="Embeds the query and returns the closest chunks in a collection",
    status_code=status.HTTP_200_OK,
)
async def search(
    request: SearchRequest,
    settings: SettingsDep,
    search_service: SearchServiceDep,
    provider_factory: ProviderFactoryDep,
) -> SearchResponse:
    """Search a collection for chunks similar to the query.

    An empty result set still returns 200 with a single "No results found."
    entry. Failures are raised as application exceptions and rendered by the
    registered exception handlers (404 for a missing collection, 422 for bad
    configuration, 502 for upstream failures).

    Args:
        request: Search request with query, collection and embedding service.
        settings: Injected application settings.
        search_service: Injected search service.
        provider_factory: Injected embedding provider factory.

    Returns:
        SearchResponse: Ranked and formatted results.
    """
    logger.info(
        f"Search request: query='{request.query}', "
        f"collection={request.collection}, "
        f"embedding_service={request.embedding_service.value}, "
        f"limit={request.limit}"
    )

    provider = provider_factory(request.embedding_service, settings)
    response = await search_service.search(
        query=request.query,
        collection=request.collection,
        provider=provider,
        limit=request.limit,
    )

    logger.info(f"Search completed: {response.total_results} results")
    return response
