"""Tool endpoints: list tools and call one by name over HTTP."""

from fastapi import APIRouter
from mcp import types

from better_qdrant.dependencies import ToolServiceDep
from better_qdrant.schemas.tools import ToolCallRequest

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get(
    "",
    response_model=types.ListToolsResult,
    response_model_exclude_none=True,
    summary="List Tools",
    description="Returns the available tools and their input schemas",
)
async def list_tools(tool_service: ToolServiceDep) -> types.ListToolsResult:
    return types.ListToolsResult(tools=tool_service.list_tools())


@router.post(
    "/call",
    response_model=types.CallToolResult,
    response_model_exclude_none=True,
    summary="Call Tool",
    description="Runs a tool; operation failures come back as results with isError set",
)
async def call_tool(request: ToolCallRequest, tool_service: ToolServiceDep) -> types.CallToolResult:
    """Invoke a tool by name.

    Unknown tools return 404 and malformed arguments return 422. Any failure
    while the tool runs is reported in the result body with ``isError``.
    """
    return await tool_service.call_tool(request.name, request.arguments)
