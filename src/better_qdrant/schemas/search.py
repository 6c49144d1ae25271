"""Search request and response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from better_qdrant.embeddings.base import EmbeddingServiceType


class SearchRequest(BaseModel):
    """Request model for search endpoint."""

    query: str = Field(..., description="Search query text", min_length=1)
    collection: str = Field(..., description="Name of the collection to search in", min_length=1)
    embedding_service: EmbeddingServiceType = Field(..., description="Embedding service to use")
    limit: int | None = Field(
        None, description="Maximum number of results to return", ge=1, le=100
    )


class SearchResultItem(BaseModel):
    """Individual ranked search result."""

    rank: int = Field(..., description="1-based position in the result list")
    id: str | int = Field(..., description="Point ID")
    score: float = Field(..., description="Similarity score, higher is closer")
    text: str = Field(..., description="Matched text, or the payload as JSON")
    source: str | None = Field(None, description="Source document, when recorded")
    payload: dict[str, Any] = Field(default_factory=dict, description="Raw point payload")


class SearchResponse(BaseModel):
    """Response model for search endpoint."""

    query: str = Field(..., description="Original search query")
    collection: str = Field(..., description="Collection that was searched")
    results: list[SearchResultItem] = Field(..., description="Results in store order")
    entries: list[str] = Field(
        ..., description="Formatted entries; a single no-results entry when empty"
    )
    text: str = Field(..., description="Formatted entries joined into one block")
    total_results: int = Field(..., description="Number of matched points")
