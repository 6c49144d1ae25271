"""Tool argument models and the REST request for calling a tool."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from better_qdrant.embeddings.base import EmbeddingServiceType


class ToolArguments(BaseModel):
    """Base for tool arguments; accepts camelCase keys from tool clients."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ListCollectionsArgs(ToolArguments):
    pass


class AddDocumentsArgs(ToolArguments):
    file_path: str = Field(..., alias="filePath", description="Path to the file to process")
    collection: str = Field(..., description="Name of the collection to add documents to")
    embedding_service: EmbeddingServiceType = Field(
        ..., alias="embeddingService", description="Embedding service to use"
    )
    chunk_size: int | None = Field(
        None, alias="chunkSize", description="Size of text chunks (optional)"
    )
    chunk_overlap: int | None = Field(
        None, alias="chunkOverlap", description="Overlap between chunks (optional)"
    )


class SearchArgs(ToolArguments):
    query: str = Field(..., description="Search query")
    collection: str = Field(..., description="Name of the collection to search in")
    embedding_service: EmbeddingServiceType = Field(
        ..., alias="embeddingService", description="Embedding service to use"
    )
    limit: int | None = Field(
        None, ge=1, description="Maximum number of results to return (optional)"
    )


class DeleteCollectionArgs(ToolArguments):
    collection: str = Field(..., description="Name of the collection to delete")


class ToolCallRequest(BaseModel):
    """Request model for invoking a tool by name."""

    name: str = Field(..., description="Tool name", min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
