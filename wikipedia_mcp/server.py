"""
MCP server exposing the Wikipedia tool plugins over stdio.

Tools come from the plugin registry; every call is turned into a
CallToolResult, with isError set when the operation failed. The process
never stops because a single call failed.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from . import __version__
from .application.article_service import ArticleService, get_article_service
from .domain.interfaces.tool_plugin import ToolRegistry
from .domain.models.tool import ToolCall, ToolExecutionContext, ToolResult, ToolSchema
from .infrastructure.config.settings import get_settings
from .infrastructure.tools.registry import DefaultToolRegistry


logger = logging.getLogger(__name__)

SUMMARY_RESOURCE_TEMPLATE = "wikipedia://article/{title}/summary"
_SUMMARY_URI_RE = re.compile(r"^wikipedia://article/(?P<title>.+)/summary/?$")


def to_mcp_tool(schema: ToolSchema) -> types.Tool:
    return types.Tool(
        name=schema.name,
        description=schema.description,
        inputSchema=schema.input_schema,
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=not result.success,
    )


async def dispatch_tool_call(
    registry: ToolRegistry,
    name: str,
    arguments: Any,
    context: Optional[ToolExecutionContext] = None
) -> types.CallToolResult:
    """Run one named tool and convert the outcome for the MCP transport."""
    try:
        tool_call = ToolCall.from_request(name, arguments)
    except ValueError as e:
        logger.warning(f"{name} rejected: {e}")
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=str(e))],
            isError=True,
        )
    result = await registry.execute_tool(tool_call, context or ToolExecutionContext())
    if result.success:
        logger.debug(f"{name} completed in {result.execution_time_ms or 0:.1f}ms")
    else:
        logger.warning(f"{name} failed: {result.error}")
    return to_call_tool_result(result)


def parse_summary_uri(uri: str) -> str:
    """Extract the article title from a ``wikipedia://article/{title}/summary`` URI."""
    match = _SUMMARY_URI_RE.match(uri)
    if not match:
        raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=f"Unknown resource: {uri}"))
    return unquote(match.group("title"))


async def read_summary_resource(service: ArticleService, uri: str) -> str:
    title = parse_summary_uri(uri)
    result = await service.get_article_summary(title)
    if not result.success:
        raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=result.error or "Unknown error"))
    return result.text


def create_server(
    registry: Optional[ToolRegistry] = None,
    service: Optional[ArticleService] = None,
    name: Optional[str] = None
) -> Server:
    """Build the MCP server with tool and resource handlers registered."""
    registry = registry or DefaultToolRegistry()
    app = Server(name or get_settings().mcp_server.name, version=__version__)

    @app.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(schema) for schema in registry.get_schemas()]

    @app.call_tool()
    async def call_tool(tool_name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        return await dispatch_tool_call(registry, tool_name, arguments)

    @app.list_resource_templates()
    async def list_resource_templates() -> List[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=SUMMARY_RESOURCE_TEMPLATE,
                name="article-summary",
                description="Plain-text summary of a Wikipedia article (percent-encode the title).",
                mimeType="text/plain",
            )
        ]

    @app.read_resource()
    async def read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
        text = await read_summary_resource(service or get_article_service(), str(uri))
        return [ReadResourceContents(content=text, mime_type="text/plain")]

    return app


async def serve(app: Optional[Server] = None) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    app = app or create_server()
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Wikipedia MCP server started")
        await app.run(read_stream, write_stream, app.create_initialization_options())
