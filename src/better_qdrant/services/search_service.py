"""Search service for dense similarity search."""

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import ValidationException
from better_qdrant.core.logging import get_logger
from better_qdrant.embeddings.base import EmbeddingProvider
from better_qdrant.schemas.search import SearchResponse, SearchResultItem
from better_qdrant.services import result_formatter
from better_qdrant.services.qdrant_service import QdrantService

logger = get_logger(__name__)


class SearchService:
    """Service for similarity search operations."""

    def __init__(
        self,
        settings: Settings,
        qdrant_service: QdrantService,
    ):
        """Initialize search service.

        Args:
            settings: Application settings.
            qdrant_service: Qdrant service instance.
        """
        self.settings = settings
        self.qdrant_service = qdrant_service

    async def search(
        self,
        query: str,
        collection: str,
        provider: EmbeddingProvider,
        limit: int | None = None,
    ) -> SearchResponse:
        """Embed the query, search the collection, and format the matches.

        Result order is the store's order; nothing is re-sorted here.
        """
        if limit is None:
            limit = self.settings.search_limit
        if limit < 1:
            raise ValidationException(f"limit must be at least 1, got {limit}")
        try:
            logger.info(
                "Search: query='%s', collection=%s, service=%s, limit=%s",
                query,
                collection,
                provider.service_type.value,
                limit,
            )

            [query_vector] = await provider.generate_embeddings([query])
            results = await self.qdrant_service.search(collection, query_vector, limit)

            items = [
                SearchResultItem(
                    rank=rank,
                    id=result.id,
                    score=result.score,
                    text=result_formatter.extract_text(result.payload),
                    source=result_formatter.extract_source(result.payload) or None,
                    payload=result.payload,
                )
                for rank, result in enumerate(results, start=1)
            ]
            entries = result_formatter.format_results(results)

            logger.info("Search completed: %s results from '%s'", len(items), collection)

            return SearchResponse(
                query=query,
                collection=collection,
                results=items,
                entries=entries,
                text=result_formatter.render_results(entries),
                total_results=len(items),
            )

        except Exception as exc:
            logger.error("Error performing search: %s", exc, exc_info=True)
            raise
