"""Article segments plugin (REST page/segments)."""
from __future__ import annotations

from wikipedia_mcp.application.article_service import ARTICLE_SEGMENTS, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": ARTICLE_SEGMENTS,
        "description": "Get the segmented structure of a Wikipedia article as JSON.",
        "parameters": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "minLength": 1, "description": "Article title"}
            },
            "required": ["title"]
        }
    }
}


async def get_article_segments(title: str) -> OperationResult:
    return await get_article_service().get_article_segments(title)


TOOL_IMPLEMENTATION = get_article_segments
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
