"""Domain models package."""

from .page import (
    DEFAULT_CHUNK_LENGTH,
    PageRequest,
    PaginatedChunk,
    RangedFetchResult,
    StatusKind
)
from .operation import OperationResult
from .tool import (
    ToolCall,
    ToolCallStatus,
    ToolExecutionContext,
    ToolResult,
    ToolSchema
)

__all__ = [
    "DEFAULT_CHUNK_LENGTH",
    "PageRequest",
    "PaginatedChunk",
    "RangedFetchResult",
    "StatusKind",
    "OperationResult",
    "ToolCall",
    "ToolCallStatus",
    "ToolExecutionContext",
    "ToolResult",
    "ToolSchema"
]
