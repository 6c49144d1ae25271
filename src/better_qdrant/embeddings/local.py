"""In-process embedding provider using FastEmbed ONNX models."""

from __future__ import annotations

import asyncio

from llama_index.core.base.embeddings.base import BaseEmbedding
from llama_index.embeddings.fastembed import FastEmbedEmbedding  # type: ignore

from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType


class FastEmbedEmbeddingProvider(EmbeddingProvider):
    """Runs a FastEmbed model in-process; no credentials needed.

    Loading may download model weights, so it happens on the first embedding
    request rather than at construction. Loading and inference both run in a
    worker thread to keep the event loop free.
    """

    service_type = EmbeddingServiceType.FASTEMBED
    default_model = "BAAI/bge-small-en"
    known_vector_sizes = {
        "BAAI/bge-small-en": 384,
        "BAAI/bge-small-en-v1.5": 384,
        "BAAI/bge-base-en": 768,
        "BAAI/bge-base-en-v1.5": 768,
        "BAAI/bge-large-en-v1.5": 1024,
        "sentence-transformers/all-MiniLM-L6-v2": 384,
        "nomic-ai/nomic-embed-text-v1.5": 768,
    }

    def __init__(
        self,
        model: str | None = None,
        vector_size: int | None = None,
        timeout: float = 60.0,
        batch_size: int = 100,
        cache_dir: str | None = None,
    ):
        self.cache_dir = cache_dir
        super().__init__(model=model, vector_size=vector_size, timeout=timeout, batch_size=batch_size)

    def _build_model(self) -> BaseEmbedding:
        return FastEmbedEmbedding(
            model_name=self.model_name,
            cache_dir=self.cache_dir,
            embed_batch_size=self.batch_size,
        )

    async def _load_model(self) -> BaseEmbedding:
        return await asyncio.to_thread(self._build_model)

    async def _embed(self, model: BaseEmbedding, texts: list[str]) -> list[list[float]]:
        return await asyncio.to_thread(model.get_text_embedding_batch, texts)
