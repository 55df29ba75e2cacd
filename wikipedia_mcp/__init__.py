"""
Wikipedia MCP - Model Context Protocol server exposing Wikipedia lookups as tools.
"""

__version__ = "1.0.0"
__author__ = "Wikipedia MCP Team"

__all__ = [
    "ArticleService",
    "PageRequest",
    "PaginatedChunk",
    "RangedFetchResult",
    "RemoteFetchError",
    "create_server",
    "paginate",
]

# Lazy attribute access to avoid importing the MCP stack at package import time.
# This keeps `import wikipedia_mcp.domain...` safe during test collection.
def __getattr__(name: str):  # pragma: no cover - simple lazy loader
    if name == "ArticleService":
        from .application.article_service import ArticleService as _S
        return _S
    if name == "create_server":
        from .server import create_server as _c
        return _c
    if name == "paginate":
        from .domain.services.pagination import paginate as _p
        return _p
    if name == "RemoteFetchError":
        from .domain.errors import RemoteFetchError as _E
        return _E
    if name in {"PageRequest", "PaginatedChunk", "RangedFetchResult"}:
        from .domain.models import page as _page
        return getattr(_page, name)
    raise AttributeError(f"module 'wikipedia_mcp' has no attribute {name!r}")
