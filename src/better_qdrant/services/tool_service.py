"""Tool dispatch for the four collection operations."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from mcp import types
from pydantic import ValidationError

from better_qdrant.config import Settings
from better_qdrant.core.exceptions import AppException, NotFoundException, ValidationException
from better_qdrant.core.logging import get_logger
from better_qdrant.embeddings.base import EmbeddingProvider, EmbeddingServiceType
from better_qdrant.embeddings.factory import create_embedding_provider
from better_qdrant.schemas.tools import (
    AddDocumentsArgs,
    DeleteCollectionArgs,
    ListCollectionsArgs,
    SearchArgs,
    ToolArguments,
)
from better_qdrant.services.ingestion_service import IngestionService
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.services.search_service import SearchService
from better_qdrant.text_processing.chunker import ChunkSettings

logger = get_logger(__name__)

ProviderFactory = Callable[[EmbeddingServiceType, Settings], EmbeddingProvider]


def text_result(text: str, *, is_error: bool = False) -> types.CallToolResult:
    """Wrap text in a single-block tool result."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


@dataclass(frozen=True)
class _Tool:
    description: str
    args_model: type[ToolArguments]
    error_prefix: str


_TOOLS: dict[str, _Tool] = {
    "list_collections": _Tool(
        description="List all available Qdrant collections",
        args_model=ListCollectionsArgs,
        error_prefix="Error listing collections",
    ),
    "add_documents": _Tool(
        description="Add documents to a Qdrant collection with specified embedding service",
        args_model=AddDocumentsArgs,
        error_prefix="Error adding documents",
    ),
    "search": _Tool(
        description="Search for similar documents in a collection",
        args_model=SearchArgs,
        error_prefix="Error searching",
    ),
    "delete_collection": _Tool(
        description="Delete a Qdrant collection",
        args_model=DeleteCollectionArgs,
        error_prefix="Error deleting collection",
    ),
}


class ToolService:
    """Validates tool arguments and converts every operation failure into an error result."""

    def __init__(
        self,
        settings: Settings,
        qdrant_service: QdrantService,
        ingestion_service: IngestionService,
        search_service: SearchService,
        provider_factory: ProviderFactory = create_embedding_provider,
    ):
        self.settings = settings
        self.qdrant_service = qdrant_service
        self.ingestion_service = ingestion_service
        self.search_service = search_service
        self.provider_factory = provider_factory

        self._handlers: dict[str, Callable[[Any], Awaitable[str]]] = {
            "list_collections": self._list_collections,
            "add_documents": self._add_documents,
            "search": self._search,
            "delete_collection": self._delete_collection,
        }

    def list_tools(self) -> list[types.Tool]:
        """Describe the available tools with their JSON input schemas."""
        return [
            types.Tool(
                name=name,
                description=tool.description,
                inputSchema=tool.args_model.model_json_schema(by_alias=True),
            )
            for name, tool in _TOOLS.items()
        ]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any] | None = None,
    ) -> types.CallToolResult:
        """Run a tool.

        Raises:
            NotFoundException: Unknown tool name.
            ValidationException: Arguments do not match the tool's schema.
        """
        tool = _TOOLS.get(name)
        if tool is None:
            raise NotFoundException(f"Unknown tool: {name}")

        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise ValidationException(f"Invalid arguments for {name}: {exc}") from exc

        try:
            text = await self._handlers[name](args)
        except AppException as exc:
            logger.warning("Tool '%s' failed: %s", name, exc.message)
            return text_result(f"{tool.error_prefix}: {exc.message}", is_error=True)
        except Exception as exc:
            logger.error("Tool '%s' failed unexpectedly: %s", name, exc, exc_info=True)
            return text_result(f"{tool.error_prefix}: {exc}", is_error=True)

        return text_result(text)

    async def _list_collections(self, args: ListCollectionsArgs) -> str:
        collections = await self.qdrant_service.list_collections()
        return json.dumps(collections, indent=2)

    async def _add_documents(self, args: AddDocumentsArgs) -> str:
        chunk_settings = ChunkSettings.from_settings(
            self.settings,
            chunk_size=args.chunk_size,
            chunk_overlap=args.chunk_overlap,
        )
        provider = self.provider_factory(args.embedding_service, self.settings)
        stats = await self.ingestion_service.ingest_file(
            file_path=args.file_path,
            collection=args.collection,
            provider=provider,
            chunk_settings=chunk_settings,
        )
        return (
            f"Successfully processed and added {stats.chunks} chunks "
            f"to collection {stats.collection}"
        )

    async def _search(self, args: SearchArgs) -> str:
        provider = self.provider_factory(args.embedding_service, self.settings)
        response = await self.search_service.search(
            query=args.query,
            collection=args.collection,
            provider=provider,
            limit=args.limit,
        )
        return response.text

    async def _delete_collection(self, args: DeleteCollectionArgs) -> str:
        await self.qdrant_service.delete_collection(args.collection)
        return f"Successfully deleted collection: {args.collection}"
