"""Article summary plugin (REST page/summary)."""
from __future__ import annotations

from wikipedia_mcp.application.article_service import ARTICLE_SUMMARY, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": ARTICLE_SUMMARY,
        "description": "Get the plain-text summary (lead extract) of a Wikipedia article.",
        "parameters": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "minLength": 1, "description": "Article title"}
            },
            "required": ["title"]
        }
    }
}


async def get_article_summary(title: str) -> OperationResult:
    return await get_article_service().get_article_summary(title)


TOOL_IMPLEMENTATION = get_article_summary
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
