#!/usr/bin/env python
"""MCP server exposing the collection tools over stdio.

Usage:
    better-qdrant-mcp

Clients launch the command and speak MCP on its stdin/stdout. Logs go to
stderr. Configuration comes from the same environment variables as the API.
"""

import asyncio
import sys
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from better_qdrant.config import Settings, get_settings
from better_qdrant.core.exceptions import AppException
from better_qdrant.core.logging import get_logger, setup_logging
from better_qdrant.services.ingestion_service import IngestionService
from better_qdrant.services.qdrant_service import QdrantService
from better_qdrant.services.search_service import SearchService
from better_qdrant.services.tool_service import ToolService, text_result

logger = get_logger(__name__)

SERVER_NAME = "better-qdrant"


async def handle_list_tools(tool_service: ToolService) -> list[types.Tool]:
    return tool_service.list_tools()


async def handle_call_tool(
    tool_service: ToolService,
    name: str,
    arguments: dict[str, Any] | None,
) -> types.CallToolResult:
    """Run a tool; unknown names and bad arguments also come back as error results."""
    try:
        return await tool_service.call_tool(name, arguments)
    except AppException as exc:
        logger.warning("Rejected tool call '%s': %s", name, exc.message)
        return text_result(exc.message, is_error=True)


def build_server(tool_service: ToolService, settings: Settings) -> Server:
    """Create an MCP server whose tool handlers delegate to ``tool_service``."""
    server: Server = Server(SERVER_NAME, version=settings.app_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return await handle_list_tools(tool_service)

    # Arguments are validated by the tool service, which also accepts snake_case keys.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await handle_call_tool(tool_service, name, arguments)

    return server


async def serve(settings: Settings | None = None) -> None:
    """Serve MCP over stdio until the client disconnects."""
    settings = settings or get_settings()
    qdrant_service = QdrantService(settings)
    try:
        tool_service = ToolService(
            settings,
            qdrant_service,
            IngestionService(settings, qdrant_service),
            SearchService(settings, qdrant_service),
        )
        server = build_server(tool_service, settings)

        logger.info("Better Qdrant MCP server running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await qdrant_service.aclose()


def main() -> int:
    """Entry point."""
    setup_logging(stream=sys.stderr)
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("MCP server interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
