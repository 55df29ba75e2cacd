"""Random article plugin (REST page/random/summary)."""
from __future__ import annotations

from wikipedia_mcp.application.article_service import RANDOM_ARTICLE, get_article_service
from wikipedia_mcp.domain.models.operation import OperationResult

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": RANDOM_ARTICLE,
        "description": "Get the title and summary of a random Wikipedia article.",
        "parameters": {
            "type": "object",
            "properties": {},
            "required": []
        }
    }
}


async def random_article() -> OperationResult:
    return await get_article_service().random_article()


TOOL_IMPLEMENTATION = random_article
TOOL_AUTHOR = "core"
TOOL_VERSION = "1.0.0"
