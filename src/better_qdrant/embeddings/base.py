"""Common contract for embedding providers."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import ClassVar

from llama_index.core.base.embeddings.base import BaseEmbedding

from better_qdrant.core.exceptions import (
    AppException,
    ConfigurationError,
    EmbeddingProviderError,
)
from better_qdrant.core.logging import get_logger

logger = get_logger(__name__)


class EmbeddingServiceType(str, Enum):
    """Identifiers accepted by the command surface."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    OLLAMA = "ollama"
    FASTEMBED = "fastembed"


class EmbeddingProvider(ABC):
    """Turns texts into fixed-length vectors through a llama-index model.

    The model object is created on first use. Concurrent first callers share
    a single build held in ``_load_task``.
    """

    service_type: ClassVar[EmbeddingServiceType]
    default_model: ClassVar[str]
    known_vector_sizes: ClassVar[Mapping[str, int]] = {}

    def __init__(
        self,
        model: str | None = None,
        vector_size: int | None = None,
        timeout: float = 60.0,
        batch_size: int = 100,
    ):
        self.model_name = model or self.default_model
        self.vector_size = self._resolve_vector_size(vector_size)
        self.timeout = timeout
        self.batch_size = batch_size

        self._model: BaseEmbedding | None = None
        self._load_task: asyncio.Future[BaseEmbedding] | None = None

    def _resolve_vector_size(self, override: int | None) -> int:
        if override is not None:
            if override <= 0:
                raise ConfigurationError(f"Vector size must be positive, got {override}")
            return override

        size = self.known_vector_sizes.get(self.model_name)
        if size is None:
            env_name = f"{self.service_type.value.upper()}_VECTOR_SIZE"
            raise ConfigurationError(
                f"Unknown vector size for {self.service_type.value} model "
                f"'{self.model_name}'; set {env_name}"
            )
        return size

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    @abstractmethod
    def _build_model(self) -> BaseEmbedding:
        """Construct the underlying llama-index embedding model."""

    async def _load_model(self) -> BaseEmbedding:
        return self._build_model()

    async def get_model(self) -> BaseEmbedding:
        """Return the embedding model, building it once on first use.

        The build runs as a task that outlives a cancelled or timed-out
        caller; later callers await the same task instead of starting another.
        A failed build is forgotten so the next call can retry.
        """
        if self._model is not None:
            return self._model

        if self._load_task is None:
            logger.info(
                "Initializing %s embedding model '%s'",
                self.service_type.value,
                self.model_name,
            )
            self._load_task = asyncio.ensure_future(self._load_model())
        task = self._load_task

        try:
            model = await asyncio.shield(task)
        except Exception:
            if self._load_task is task:
                self._load_task = None
            raise

        self._model = model
        return model

    async def _embed(self, model: BaseEmbedding, texts: list[str]) -> list[list[float]]:
        return await model.aget_text_embedding_batch(texts)

    async def _generate(self, texts: list[str]) -> list[list[float]]:
        model = await self.get_model()
        return await self._embed(model, texts)

    async def generate_embeddings(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed ``texts`` and return one vector per input, in input order.

        Raises:
            EmbeddingProviderError: On timeout, backend failure, or a vector
                whose length differs from ``vector_size``.
        """
        batch = list(texts)
        if not batch:
            return []

        try:
            embeddings = await asyncio.wait_for(self._generate(batch), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise EmbeddingProviderError(
                f"{self.service_type.value} embedding request timed out after {self.timeout}s"
            ) from exc
        except AppException:
            raise
        except Exception as exc:
            logger.error(
                "Embedding request to %s failed: %s", self.service_type.value, exc, exc_info=True
            )
            raise EmbeddingProviderError(
                f"{self.service_type.value} embedding request failed: {exc}"
            ) from exc

        if len(embeddings) != len(batch):
            raise EmbeddingProviderError(
                f"{self.service_type.value} returned {len(embeddings)} embeddings "
                f"for {len(batch)} texts"
            )
        for vector in embeddings:
            if len(vector) != self.vector_size:
                raise EmbeddingProviderError(
                    f"{self.service_type.value} returned a {len(vector)}-dimensional vector, "
                    f"expected {self.vector_size}"
                )

        logger.debug(
            "Generated %d embeddings with %s/%s",
            len(embeddings),
            self.service_type.value,
            self.model_name,
        )
        return [list(vector) for vector in embeddings]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(model={self.model_name!r}, "
            f"vector_size={self.vector_size})"
        )
