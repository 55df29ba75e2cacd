"""
Tool ports used by the MCP server and the CLI.

The server only lists schemas and dispatches calls; everything about how a
tool is found or loaded stays behind these two protocols.
"""

from __future__ import annotations
from typing import List, Optional, Protocol

from ..models.tool import ToolCall, ToolExecutionContext, ToolResult, ToolSchema


class ToolPlugin(Protocol):
    """A single callable tool backed by a loaded plugin module."""

    def get_schema(self) -> ToolSchema:
        ...

    async def execute(self, tool_call: ToolCall, context: ToolExecutionContext) -> ToolResult:
        """Run the tool; failures come back as an unsuccessful ToolResult."""
        ...

    def is_available(self) -> bool:
        ...


class ToolRegistry(Protocol):
    """Lookup and dispatch surface consumed by ``server.dispatch_tool_call``."""

    def get_tool(self, name: str) -> Optional[ToolPlugin]:
        ...

    def get_schemas(self) -> List[ToolSchema]:
        """Schemas advertised through ``tools/list``."""
        ...

    async def execute_tool(self, tool_call: ToolCall, context: ToolExecutionContext) -> ToolResult:
        """Dispatch one call, never raising for tool-level failures."""
        ...
