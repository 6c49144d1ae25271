"""Helpers to translate between domain models and Qdrant transport objects."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any

from qdrant_client import models as q

from better_qdrant.core.constants import (
    K_CHUNK_INDEX,
    K_END_CHAR,
    K_SOURCE,
    K_START_CHAR,
    K_TEXT,
)
from better_qdrant.core.models import Chunk, SearchResult


def new_point_id() -> str:
    """Return a fresh random point ID."""
    return str(uuid.uuid4())


def chunk_payload(chunk: Chunk) -> dict[str, Any]:
    """Merge chunk text and metadata into a flat payload."""
    metadata = chunk.metadata
    return {
        K_TEXT: chunk.text,
        K_SOURCE: metadata.source,
        K_CHUNK_INDEX: metadata.chunk_index,
        K_START_CHAR: metadata.start_char,
        K_END_CHAR: metadata.end_char,
    }


def chunk_to_point(
    chunk: Chunk,
    embedding: Sequence[float],
    point_id: str | None = None,
) -> q.PointStruct:
    """Convert a chunk and its embedding into a Qdrant point."""
    return q.PointStruct(
        id=point_id or new_point_id(),
        vector=[float(value) for value in embedding],
        payload=chunk_payload(chunk),
    )


def chunks_to_points(
    chunks: Sequence[Chunk],
    embeddings: Sequence[Sequence[float]],
) -> list[q.PointStruct]:
    """Pair chunks with embeddings by position."""
    if len(chunks) != len(embeddings):
        raise ValueError(
            f"Expected one embedding per chunk, got {len(embeddings)} for {len(chunks)} chunks"
        )
    return [chunk_to_point(chunk, embedding) for chunk, embedding in zip(chunks, embeddings)]


def scored_point_to_result(point: q.ScoredPoint) -> SearchResult:
    """Convert a Qdrant scored point into a SearchResult."""
    vector: list[float] | None = None
    raw_vector = point.vector
    # Only unnamed dense vectors are kept; named or sparse vectors are dropped.
    if isinstance(raw_vector, list) and all(
        isinstance(value, (int, float)) for value in raw_vector
    ):
        vector = [float(value) for value in raw_vector]

    return SearchResult(
        id=_stringify_point_id(point.id),
        score=float(point.score),
        payload=dict(point.payload or {}),
        vector=vector,
    )


def _stringify_point_id(point_id: Any) -> str | int:
    if isinstance(point_id, int):
        return point_id
    return str(point_id)
