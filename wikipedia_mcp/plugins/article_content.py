"""Article content plugin: paginated access to an article's HTML by byte range."""
from __future__ import annotations

from typing import Optional

from wikipedia_mcp.application.article_service import ARTICLE_CONTENT, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult
from wikipedia_mcp.domain.models.page import DEFAULT_CHUNK_LENGTH

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": ARTICLE_CONTENT,
        "description": (
            "Get the HTML content of a Wikipedia article in byte-range chunks. "
            "When more content remains, the result ends with the offset to pass as 'start' next."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "minLength": 1, "description": "Article title, e.g. 'Cat'"},
                "start": {
                    "type": "integer",
                    "minimum": 0,
                    "default": 0,
                    "description": "Byte offset to start reading from"
                },
                "length": {
                    "type": "integer",
                    "minimum": 1,
                    "default": DEFAULT_CHUNK_LENGTH,
                    "description": "Maximum number of bytes to return"
                }
            },
            "required": ["title"]
        }
    }
}


async def get_article_content(title: str, start: int = 0, length: Optional[int] = None) -> OperationResult:
    return await get_article_service().get_article_content(title, start=start, length=length)


TOOL_IMPLEMENTATION = get_article_content
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
