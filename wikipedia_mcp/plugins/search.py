"""Wikipedia search plugin providing MediaWiki API results (no API key)."""
from __future__ import annotations

from typing import Optional

from wikipedia_mcp.application.article_service import SEARCH, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": SEARCH,
        "description": "Search Wikipedia and return matching article titles with text snippets (no API key).",
        "parameters": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "minLength": 1, "pattern": "\\S", "description": "Search query"},
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 50,
                    "description": "Number of results to return (1-50, default 10)"
                }
            },
            "required": ["query"]
        }
    }
}


async def search_wikipedia(query: str, limit: Optional[int] = None) -> OperationResult:
    """Search Wikipedia (MediaWiki API) and return formatted results."""
    return await get_article_service().search(query.strip(), limit=limit)


TOOL_IMPLEMENTATION = search_wikipedia
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
