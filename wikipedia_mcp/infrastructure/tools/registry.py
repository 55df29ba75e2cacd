"""
Tool registry implementation - Infrastructure component managing tool plugins.
Integrates with the plugin loader while implementing domain interfaces.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ...domain.models.operation import OperationResult
from ...domain.models.tool import ToolCall, ToolCallStatus, ToolResult, ToolSchema, ToolExecutionContext
from ...domain.interfaces.tool_plugin import ToolRegistry, ToolPlugin
from ...plugin_loader import PluginManager, get_manager


class PluginToolAdapter(ToolPlugin):
    """Adapter to wrap loaded plugin functions as ToolPlugin interface."""

    def __init__(
        self,
        name: str,
        schema: Dict,
        implementation: Callable[..., Any],
        logger: Optional[logging.Logger] = None
    ):
        self._name = name
        self._schema = schema
        self._implementation = implementation
        self._logger = logger or logging.getLogger(__name__)

    def get_schema(self) -> ToolSchema:
        """Get the tool schema definition."""
        return ToolSchema(
            name=self._name,
            description=self._schema.get('function', {}).get('description', ''),
            parameters=self._schema.get('function', {}).get('parameters', {}),
            implementation=self._implementation
        )

    async def execute(
        self,
        tool_call: ToolCall,
        context: ToolExecutionContext
    ) -> ToolResult:
        """Execute the tool with given arguments."""
        start_time = time.time()
        tool_call.status = ToolCallStatus.EXECUTING

        try:
            if inspect.iscoroutinefunction(self._implementation):
                outcome = await self._implementation(**tool_call.arguments)
            else:
                # Run sync function in thread pool to avoid blocking
                outcome = await asyncio.to_thread(
                    self._implementation, **tool_call.arguments
                )
        except Exception as e:
            execution_time = (time.time() - start_time) * 1000
            tool_call.status = ToolCallStatus.FAILED
            self._logger.error(f"Tool {self._name} execution failed: {e}")

            return ToolResult(
                tool_call=tool_call,
                success=False,
                content="",
                execution_time_ms=execution_time,
                error=str(e)
            )

        execution_time = (time.time() - start_time) * 1000

        if isinstance(outcome, OperationResult):
            metadata: Dict[str, Any] = dict(outcome.metadata)
            if outcome.chunk is not None:
                metadata.update({
                    "range_start": outcome.chunk.range_start,
                    "range_end": outcome.chunk.range_end,
                    "total_length": outcome.chunk.total_length,
                    "has_more": outcome.chunk.has_more,
                })
            tool_call.status = ToolCallStatus.COMPLETED if outcome.success else ToolCallStatus.FAILED
            return ToolResult(
                tool_call=tool_call,
                success=outcome.success,
                content=outcome.text,
                execution_time_ms=execution_time,
                error=outcome.error,
                metadata=metadata
            )

        tool_call.status = ToolCallStatus.COMPLETED
        return ToolResult(
            tool_call=tool_call,
            success=True,
            content=str(outcome),
            execution_time_ms=execution_time
        )

    def is_available(self) -> bool:
        """Check if tool is available for use."""
        return self._implementation is not None


class DefaultToolRegistry(ToolRegistry):
    """Default implementation of tool registry using the plugin system."""

    def __init__(
        self,
        plugin_manager: Optional[PluginManager] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._plugin_manager = plugin_manager or get_manager()
        self._logger = logger or logging.getLogger(__name__)
        self._tools: Dict[str, ToolPlugin] = {}

        # Initialize tools from plugin manager
        self._load_tools_from_plugins()

    def _load_tools_from_plugins(self) -> None:
        """Load tools from the plugin system."""
        schemas = self._plugin_manager.tool_schemas
        functions = self._plugin_manager.tool_functions

        for schema in schemas:
            tool_name = schema.get('function', {}).get('name')
            if not tool_name:
                continue

            implementation = functions.get(tool_name)
            if not implementation:
                self._logger.warning(f"No implementation found for tool: {tool_name}")
                continue

            adapter = PluginToolAdapter(
                name=tool_name,
                schema=schema,
                implementation=implementation,
                logger=self._logger
            )

            self._tools[tool_name] = adapter
            self._logger.debug(f"Registered tool: {tool_name}")

        self._logger.info(f"Loaded {len(self._tools)} tools from plugins")

    def register_tool(self, plugin: ToolPlugin) -> None:
        """Register a tool plugin."""
        schema = plugin.get_schema()
        self._tools[schema.name] = plugin
        self._logger.debug(f"Registered tool: {schema.name}")

    def get_tool(self, name: str) -> Optional[ToolPlugin]:
        """Get tool plugin by name."""
        return self._tools.get(name)

    def list_tools(self) -> List[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def get_schemas(self) -> List[ToolSchema]:
        """Get all tool schemas."""
        schemas = []
        for tool in self._tools.values():
            try:
                schemas.append(tool.get_schema())
            except Exception as e:
                self._logger.warning(f"Failed to get schema for tool: {e}")

        return schemas

    async def execute_tool(
        self,
        tool_call: ToolCall,
        context: ToolExecutionContext
    ) -> ToolResult:
        """Execute a tool call."""
        tool = self.get_tool(tool_call.name)
        if not tool:
            return ToolResult(
                tool_call=tool_call,
                success=False,
                content="",
                error=f"Tool '{tool_call.name}' not found"
            )

        if not tool.is_available():
            return ToolResult(
                tool_call=tool_call,
                success=False,
                content="",
                error=f"Tool '{tool_call.name}' not available"
            )

        try:
            result = await tool.execute(tool_call, context)
        except Exception as e:
            self._logger.error(f"Tool execution failed: {e}")
            return ToolResult(
                tool_call=tool_call,
                success=False,
                content="",
                error=f"Tool execution error: {e}"
            )

        # Apply print limit if configured (display only)
        if context.print_limit and len(result.content) > context.print_limit:
            original_length = len(result.content)
            result.content = result.content[:context.print_limit] + "..."
            result.metadata["truncated"] = True
            result.metadata["original_length"] = original_length

        return result

    def get_tool_statistics(self) -> Dict[str, Any]:
        """Get statistics about registered tools."""
        available_count = sum(1 for tool in self._tools.values() if tool.is_available())

        return {
            "total_tools": len(self._tools),
            "available_tools": available_count,
            "unavailable_tools": len(self._tools) - available_count,
            "tool_names": list(self._tools.keys())
        }
