"""Collection management and ingestion schemas."""

from pydantic import BaseModel, Field

from better_qdrant.embeddings.base import EmbeddingServiceType


class CollectionsResponse(BaseModel):
    """Names of all collections in the vector store."""

    collections: list[str] = Field(..., description="Collection names")


class AddDocumentsRequest(BaseModel):
    """Request model for adding a document to a collection."""

    file_path: str = Field(..., description="Path to the UTF-8 text file to process", min_length=1)
    embedding_service: EmbeddingServiceType = Field(..., description="Embedding service to use")
    chunk_size: int | None = Field(None, description="Chunk size in characters")
    chunk_overlap: int | None = Field(None, description="Overlap between chunks in characters")


class AddDocumentsResponse(BaseModel):
    """Response model for document ingestion."""

    collection: str = Field(..., description="Target collection")
    source: str = Field(..., description="Ingested file path")
    chunks: int = Field(..., description="Number of chunks produced and stored")
    vector_size: int = Field(..., description="Dimensionality of stored vectors")
    collection_created: bool = Field(..., description="Whether the collection was created")
    message: str = Field(..., description="Human-readable summary")


class DeleteCollectionResponse(BaseModel):
    """Response model for collection deletion."""

    collection: str = Field(..., description="Deleted collection")
    message: str = Field(..., description="Human-readable summary")
