"""
Tool domain models - Pure business logic for tool operations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Callable
from datetime import datetime
from enum import Enum
import json


class ToolCallStatus(Enum):
    """Status of tool call execution."""
    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ToolCall:
    """Represents a tool call request."""
    name: str
    arguments: Dict[str, Any]
    call_id: Optional[str] = None
    status: ToolCallStatus = ToolCallStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_request(cls, name: str, arguments: Any, call_id: Optional[str] = None) -> ToolCall:
        """Create ToolCall from a dispatch request; arguments may arrive JSON-encoded.

        Raises ValueError when the arguments are not valid JSON or not an object.
        """
        if arguments is None:
            arguments = {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON arguments for {name}: {e}") from e
        if not isinstance(arguments, dict):
            raise ValueError(f"Arguments for {name} must be a JSON object, got {type(arguments).__name__}")
        return cls(name=name, arguments=dict(arguments), call_id=call_id)


@dataclass
class ToolResult:
    """Result of tool execution."""
    tool_call: ToolCall
    success: bool
    content: str
    execution_time_ms: Optional[float] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Text shown to the caller: the content, or the error on failure."""
        if self.success:
            return self.content
        return self.error or self.content or f"Tool '{self.tool_call.name}' failed"


@dataclass
class ToolSchema:
    """Schema definition for a tool."""
    name: str
    description: str
    parameters: Dict[str, Any]
    implementation: Optional[Callable] = None

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for the tool input; no-arg tools get an empty object schema."""
        if isinstance(self.parameters, dict) and self.parameters:
            return self.parameters
        return {"type": "object", "properties": {}}


@dataclass
class ToolExecutionContext:
    """Context for tool execution."""
    print_limit: Optional[int] = None
