"""Domain interfaces package - Protocols for ports."""

from .content_source import ContentSource
from .tool_plugin import ToolPlugin, ToolRegistry

__all__ = [
    "ContentSource",
    "ToolPlugin",
    "ToolRegistry"
]
