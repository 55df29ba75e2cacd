"""Related articles plugin (REST page/related)."""
from __future__ import annotations

from wikipedia_mcp.application.article_service import RELATED_ARTICLES, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": RELATED_ARTICLES,
        "description": "List the titles of Wikipedia articles related to the given article.",
        "parameters": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "minLength": 1, "description": "Article title"}
            },
            "required": ["title"]
        }
    }
}


async def find_related_articles(title: str) -> OperationResult:
    return await get_article_service().find_related_articles(title)


TOOL_IMPLEMENTATION = find_related_articles
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
