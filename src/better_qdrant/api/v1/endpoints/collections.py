"""Collection listing, ingestion, and deletion endpoints."""

from fastapi import APIRouter, status

from better_qdrant.core.logging import get_logger
from better_qdrant.dependencies import (
    IngestionServiceDep,
    ProviderFactoryDep,
    QdrantServiceDep,
    SettingsDep,
)
from better_qdrant.schemas.collections import (
    AddDocumentsRequest,
    AddDocumentsResponse,
    CollectionsResponse,
    DeleteCollectionResponse,
)
from better_qdrant.text_processing.chunker import ChunkSettings

logger = get_logger(__name__)

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get(
    "",
    response_model=CollectionsResponse,
    summary="List Collections",
    description="Returns the names of all Qdrant collections",
)
async def list_collections(qdrant_service: QdrantServiceDep) -> CollectionsResponse:
    collections = await qdrant_service.list_collections()
    return CollectionsResponse(collections=collections)


@router.post(
    "/{collection}/documents",
    response_model=AddDocumentsResponse,
    summary="Add Documents",
    description="Chunks a text file, embeds the chunks, and stores them in the collection",
    status_code=status.HTTP_201_CREATED,
)
async def add_documents(
    collection: str,
    request: AddDocumentsRequest,
    settings: SettingsDep,
    ingestion_service: IngestionServiceDep,
    provider_factory: ProviderFactoryDep,
) -> AddDocumentsResponse:
    """Ingest a file into a collection, creating the collection if needed.

    Chunk settings and provider credentials are validated before any
    network call.

    Args:
        collection: Target collection name.
        request: File path, embedding service and optional chunk settings.
        settings: Injected application settings.
        ingestion_service: Injected ingestion service.
        provider_factory: Injected embedding provider factory.

    Returns:
        AddDocumentsResponse: Number of stored chunks and collection details.
    """
    logger.info(
        f"Add documents request: file='{request.file_path}', "
        f"collection={collection}, "
        f"embedding_service={request.embedding_service.value}"
    )

    chunk_settings = ChunkSettings.from_settings(
        settings,
        chunk_size=request.chunk_size,
        chunk_overlap=request.chunk_overlap,
    )
    provider = provider_factory(request.embedding_service, settings)
    stats = await ingestion_service.ingest_file(
        file_path=request.file_path,
        collection=collection,
        provider=provider,
        chunk_settings=chunk_settings,
    )

    return AddDocumentsResponse(
        collection=stats.collection,
        source=stats.source,
        chunks=stats.chunks,
        vector_size=stats.vector_size,
        collection_created=stats.collection_created,
        message=(
            f"Successfully processed and added {stats.chunks} chunks "
            f"to collection {stats.collection}"
        ),
    )


@router.delete(
    "/{collection}",
    response_model=DeleteCollectionResponse,
    summary="Delete Collection",
    description="Deletes a collection and all of its points",
)
async def delete_collection(
    collection: str,
    qdrant_service: QdrantServiceDep,
) -> DeleteCollectionResponse:
    await qdrant_service.delete_collection(collection)
    return DeleteCollectionResponse(
        collection=collection,
        message=f"Successfully deleted collection: {collection}",
    )
