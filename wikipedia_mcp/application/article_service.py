"""
Article service - Application layer orchestrating Wikipedia operations.
Coordinates the content source with the pagination formatter and is the single
place where fetch failures become error results.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..domain.errors import RemoteFetchError
from ..domain.interfaces.content_source import ContentSource
from ..domain.models.operation import OperationResult
from ..domain.models.page import DEFAULT_CHUNK_LENGTH, PageRequest
from ..domain.services.pagination import paginate
from ..infrastructure.wikipedia.client import WikipediaClient, encode_title
from ..utils import strip_html


ARTICLE_CONTENT = "get-article-content"
ARTICLE_SUMMARY = "get-article-summary"
ARTICLE_SEGMENTS = "get-article-segments"
RELATED_ARTICLES = "find-related-articles"
RANDOM_ARTICLE = "random-article"
SEARCH = "search-wikipedia"

# Prefix put in front of the failure cause for each operation
ERROR_PREFIXES: Dict[str, str] = {
    ARTICLE_CONTENT: "Error retrieving article content",
    ARTICLE_SUMMARY: "Error retrieving article summary",
    ARTICLE_SEGMENTS: "Error retrieving article segments",
    RELATED_ARTICLES: "Error finding related articles",
    RANDOM_ARTICLE: "Error fetching random article",
    SEARCH: "Error searching Wikipedia",
}

NO_SUMMARY = "No summary available"


def _field(data: Any, key: str) -> Any:
    return data.get(key) if isinstance(data, dict) else None


def render_summary(data: Any) -> str:
    return _field(data, "extract") or NO_SUMMARY


def render_segments(data: Any) -> str:
    if not data:
        return "No segments available"
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_related(title: str, data: Any) -> str:
    pages = _field(data, "pages")
    titles: List[str] = []
    if isinstance(pages, list):
        titles = [str(p.get("title")) for p in pages if isinstance(p, dict) and p.get("title")]
    related = "\n- ".join(titles) if titles else "No related articles"
    return f'Related articles to "{title}":\n- {related}'


def render_random(data: Any) -> str:
    return f"Random article: {_field(data, 'title')}\n\n{render_summary(data)}"


def render_search(query: str, data: Any) -> str:
    items = (_field(data, "query") or {}).get("search") or []
    lines = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = item.get("title") or "(no title)"
        snippet = strip_html(item.get("snippet") or "").replace("\n", " ")
        lines.append(f"- {title}: {snippet}")
    results = "\n".join(lines)
    return f'Search results for "{query}":\n{results or "No results found"}'


class ArticleService:
    """Application service for Wikipedia operations."""

    def __init__(
        self,
        source: Optional[ContentSource] = None,
        default_chunk_length: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._source = source or WikipediaClient()
        if default_chunk_length is None:
            settings = getattr(self._source, "settings", None)
            default_chunk_length = getattr(settings, "default_chunk_length", DEFAULT_CHUNK_LENGTH)
        self._default_chunk_length = default_chunk_length
        self._logger = logger or logging.getLogger(__name__)

    @property
    def default_chunk_length(self) -> int:
        return self._default_chunk_length

    def _failure(self, operation: str, cause: Exception) -> OperationResult:
        message = f"{ERROR_PREFIXES[operation]}: {cause}"
        self._logger.warning(f"{operation} failed: {cause}")
        metadata: Dict[str, Any] = {}
        if isinstance(cause, RemoteFetchError):
            metadata = dict(cause.context)
        return OperationResult.failed(operation, message, **metadata)

    async def _lookup(
        self,
        operation: str,
        fetch: Callable[[], Awaitable[Any]],
        render: Callable[[Any], str]
    ) -> OperationResult:
        """Fetch a JSON payload, extract what the operation needs and format it as text."""
        try:
            data = await fetch()
        except RemoteFetchError as e:
            return self._failure(operation, e)
        return OperationResult.ok(operation, render(data))

    async def get_article_content(
        self,
        title: str,
        start: int = 0,
        length: Optional[int] = None
    ) -> OperationResult:
        """Fetch one byte window of an article's HTML with a continuation notice."""
        try:
            request = PageRequest(
                title=title,
                start=start,
                length=self._default_chunk_length if length is None else length
            )
        except ValueError as e:
            return self._failure(ARTICLE_CONTENT, e)

        try:
            result = await self._source.fetch_html_range(request)
        except RemoteFetchError as e:
            return self._failure(ARTICLE_CONTENT, e)

        chunk = paginate(result, request.start)
        return OperationResult.ok(ARTICLE_CONTENT, chunk.text, chunk=chunk)

    async def get_article_summary(self, title: str) -> OperationResult:
        return await self._lookup(
            ARTICLE_SUMMARY,
            lambda: self._source.fetch_json(f"/page/summary/{encode_title(title)}"),
            render_summary
        )

    async def get_article_segments(self, title: str) -> OperationResult:
        return await self._lookup(
            ARTICLE_SEGMENTS,
            lambda: self._source.fetch_json(f"/page/segments/{encode_title(title)}"),
            render_segments
        )

    async def find_related_articles(self, title: str) -> OperationResult:
        return await self._lookup(
            RELATED_ARTICLES,
            lambda: self._source.fetch_json(f"/page/related/{encode_title(title)}"),
            lambda data: render_related(title, data)
        )

    async def random_article(self) -> OperationResult:
        return await self._lookup(
            RANDOM_ARTICLE,
            lambda: self._source.fetch_json("/page/random/summary"),
            render_random
        )

    async def search(self, query: str, limit: Optional[int] = None) -> OperationResult:
        return await self._lookup(
            SEARCH,
            lambda: self._source.search(query, limit=limit),
            lambda data: render_search(query, data)
        )


# Process-wide default used by the tool plugins
_default_service: Optional[ArticleService] = None


def get_article_service() -> ArticleService:
    """Get the default article service, creating it from settings on first use."""
    global _default_service
    if _default_service is None:
        _default_service = ArticleService()
    return _default_service


def set_article_service(service: Optional[ArticleService]) -> None:
    """Replace the default article service (None resets to settings-based creation)."""
    global _default_service
    _default_service = service
