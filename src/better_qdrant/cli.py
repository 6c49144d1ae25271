#!/usr/bin/env python
"""Command-line access to the collection tools.

Usage:
    better-qdrant list
    better-qdrant add --file notes.txt --collection docs --embedding-service fastembed \
        [--chunk-size 1000] [--chunk-overlap 200]
    better-qdrant search --query "vector databases" --collection docs \
        --embedding-service fastembed [--limit 5]
    better-qdrant delete --collection docs
"""

import argparse
import asyncio
import sys
from typing import Any

from mcp import types

from better_qdrant.config import get_settings
from better_qdrant.core.exceptions import AppException
from better_qdrant.core.logging import get_logger, setup_logging
from better_qdrant.embeddings.base import EmbeddingServiceType
from better_qdrant.services.ingestion_service import IngestionService
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.services.search_service import SearchService
from better_qdrant.services.tool_service import ToolService

logger = get_logger(__name__)

_SERVICES = [service.value for service in EmbeddingServiceType]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="better-qdrant",
        description="Add, search, and manage document collections in Qdrant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Ingest a file with the local FastEmbed model
  better-qdrant add --file notes.txt --collection docs --embedding-service fastembed

  # Search it
  better-qdrant search --query "how are chunks stored" --collection docs --embedding-service fastembed
        """,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all collections")

    add = commands.add_parser("add", help="Add a text file to a collection")
    add.add_argument("--file", required=True, help="Path to the file to process")
    add.add_argument("--collection", required=True, help="Target collection name")
    add.add_argument("--embedding-service", required=True, choices=_SERVICES)
    add.add_argument("--chunk-size", type=int, help="Chunk size in characters")
    add.add_argument("--chunk-overlap", type=int, help="Overlap between chunks in characters")

    search = commands.add_parser("search", help="Search a collection")
    search.add_argument("--query", required=True, help="Search query")
    search.add_argument("--collection", required=True, help="Collection to search")
    search.add_argument("--embedding-service", required=True, choices=_SERVICES)
    search.add_argument("--limit", type=int, help="Maximum number of results")

    delete = commands.add_parser("delete", help="Delete a collection")
    delete.add_argument("--collection", required=True, help="Collection to delete")

    return parser


def to_tool_call(args: argparse.Namespace) -> tuple[str, dict[str, Any]]:
    """Translate parsed arguments into a tool name and tool arguments."""
    match args.command:
        case "list":
            return "list_collections", {}
        case "add":
            return "add_documents", {
                "filePath": args.file,
                "collection": args.collection,
                "embeddingService": args.embedding_service,
                "chunkSize": args.chunk_size,
                "chunkOverlap": args.chunk_overlap,
            }
        case "search":
            return "search", {
                "query": args.query,
                "collection": args.collection,
                "embeddingService": args.embedding_service,
                "limit": args.limit,
            }
        case "delete":
            return "delete_collection", {"collection": args.collection}
    raise ValueError(f"Unknown command: {args.command}")


async def run_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
    """Run one tool against the configured Qdrant server."""
    settings = get_settings()
    qdrant_service = QdrantService(settings)
    try:
        tool_service = ToolService(
            settings,
            qdrant_service,
            IngestionService(settings, qdrant_service),
            SearchService(settings, qdrant_service),
        )
        return await tool_service.call_tool(name, arguments)
    finally:
        await qdrant_service.aclose()


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(stream=sys.stderr)

    name, arguments = to_tool_call(args)
    try:
        result = asyncio.run(run_tool(name, arguments))
    except AppException as exc:
        print(exc.message, file=sys.stderr)
        return 2

    output = "\n".join(item.text for item in result.content if isinstance(item, types.TextContent))
    print(output, file=sys.stderr if result.isError else sys.stdout)
    return 1 if result.isError else 0


if __name__ == "__main__":
    sys.exit(main())
