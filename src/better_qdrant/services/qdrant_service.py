"""Thin Qdrant service for collection and point management."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import grpc
import httpx
from qdrant_client import AsyncQdrantClient
from qdrant_client import models as q
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from better_qdrant.adapters import qdrant_mapper
from better_qdrant.config import Settings
from better_qdrant.core.exceptions import (
    AppException,
    CollectionNotFoundError,
    ConfigurationError,
    TransportError,
)
from better_qdrant.core.logging import get_logger
from better_qdrant.core.models import SearchResult

logger = get_logger(__name__)


class QdrantService:
    """Wrapper around the async Qdrant client.

    Every call is bounded by ``settings.qdrant_timeout`` through the client.
    Client failures surface as ``TransportError``; operations on a missing
    collection surface as ``CollectionNotFoundError``.
    """

    def __init__(
        self,
        settings: Settings,
        aclient: AsyncQdrantClient | None = None,
    ):
        self.settings = settings
        self.aclient = aclient or AsyncQdrantClient(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key,
            prefer_grpc=settings.qdrant_prefer_grpc,
            timeout=settings.qdrant_timeout,
        )

        logger.info("QdrantService initialized for '%s'", settings.qdrant_url)

    async def aclose(self) -> None:
        """Close the client."""
        await self.aclient.close()

    @contextmanager
    def _translate_errors(self, action: str, collection: str | None = None) -> Iterator[None]:
        try:
            yield
        except AppException:
            raise
        except UnexpectedResponse as exc:
            if exc.status_code == 404 and collection is not None:
                raise CollectionNotFoundError(collection) from exc
            logger.error("Qdrant %s failed with HTTP %s", action, exc.status_code)
            raise TransportError(
                f"Qdrant {action} failed: HTTP {exc.status_code} {exc.reason_phrase}"
            ) from exc
        except grpc.RpcError as exc:
            code = exc.code() if callable(getattr(exc, "code", None)) else None
            if code == grpc.StatusCode.NOT_FOUND and collection is not None:
                raise CollectionNotFoundError(collection) from exc
            logger.error("Qdrant %s failed over gRPC: %s", action, code or exc)
            detail = code.name if code is not None else str(exc)
            raise TransportError(f"Qdrant {action} failed: gRPC {detail}") from exc
        except (ResponseHandlingException, httpx.HTTPError, OSError) as exc:
            logger.error("Qdrant %s failed: %s", action, exc)
            raise TransportError(f"Qdrant {action} failed: {exc}") from exc

    async def list_collections(self) -> list[str]:
        """Return the names of all collections."""
        with self._translate_errors("list collections"):
            response = await self.aclient.get_collections()
        names = [collection.name for collection in response.collections]
        logger.debug("Found %d collections", len(names))
        return names

    async def collection_exists(self, name: str) -> bool:
        """Return True if the collection already exists."""
        with self._translate_errors("collection lookup"):
            return await self.aclient.collection_exists(name)

    async def get_vector_size(self, name: str) -> int | None:
        """Return the dense vector size of an unnamed-vector collection."""
        with self._translate_errors("collection info", collection=name):
            info = await self.aclient.get_collection(name)
        vectors = info.config.params.vectors
        if isinstance(vectors, q.VectorParams):
            return vectors.size
        return None

    async def create_collection(self, name: str, vector_size: int) -> None:
        """Create a cosine-distance collection with the given dimensionality."""
        logger.info("Creating collection '%s' (size=%d, distance=cosine)", name, vector_size)
        with self._translate_errors("create collection"):
            await self.aclient.create_collection(
                collection_name=name,
                vectors_config=q.VectorParams(size=vector_size, distance=q.Distance.COSINE),
            )
        logger.info("Created collection '%s'", name)

    async def ensure_collection(self, name: str, vector_size: int) -> bool:
        """Create the collection if absent.

        A creation failure is tolerated when the collection exists afterwards,
        which covers a concurrent creator winning the race.

        Returns:
            True if this call created the collection.

        Raises:
            ConfigurationError: The existing collection has another vector size.
        """
        if name in await self.list_collections():
            existing_size = await self.get_vector_size(name)
            if existing_size is not None and existing_size != vector_size:
                raise ConfigurationError(
                    f"Collection '{name}' stores {existing_size}-dimensional vectors, "
                    f"but the embedding service produces {vector_size}"
                )
            logger.debug("Collection '%s' already exists", name)
            return False

        try:
            await self.create_collection(name, vector_size)
        except Exception as exc:
            if await self.collection_exists(name):
                logger.info("Collection '%s' was created concurrently: %s", name, exc)
                return False
            raise
        return True

    async def upsert_points(
        self,
        collection: str,
        points: Sequence[q.PointStruct],
        *,
        wait: bool = True,
    ) -> None:
        """Upsert a batch of points in one request."""
        if not points:
            return

        with self._translate_errors("upsert", collection=collection):
            await self.aclient.upsert(
                collection_name=collection,
                points=list(points),
                wait=wait,
            )
        logger.debug("Upserted %d points into '%s'", len(points), collection)

    async def search(
        self,
        collection: str,
        vector: Sequence[float],
        limit: int = 10,
        *,
        with_vectors: bool = False,
    ) -> list[SearchResult]:
        """Return the ``limit`` nearest points, best first."""
        if not await self.collection_exists(collection):
            raise CollectionNotFoundError(collection)

        with self._translate_errors("search", collection=collection):
            response = await self.aclient.query_points(
                collection_name=collection,
                query=list(vector),
                limit=limit,
                with_payload=True,
                with_vectors=with_vectors,
            )
        results = [qdrant_mapper.scored_point_to_result(point) for point in response.points]
        logger.debug("Search in '%s' returned %d points", collection, len(results))
        return results

    async def delete_collection(self, name: str) -> None:
        """Delete a collection."""
        if not await self.collection_exists(name):
            raise CollectionNotFoundError(name)

        with self._translate_errors("delete collection", collection=name):
            deleted = await self.aclient.delete_collection(collection_name=name)
        if not deleted:
            raise CollectionNotFoundError(name)
        logger.info("Deleted collection '%s'", name)


__all__ = ["QdrantService"]
