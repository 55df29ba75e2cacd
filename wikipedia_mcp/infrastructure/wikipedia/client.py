"""
Wikipedia client - Infrastructure adapter for the Wikipedia REST and action APIs.

Every call issues exactly one outbound request on a short-lived httpx.AsyncClient;
nothing is cached or shared between calls.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ...domain.errors import RemoteFetchError
from ...domain.interfaces.content_source import ContentSource
from ...domain.models.page import PageRequest, RangedFetchResult, StatusKind
from ..config.settings import WikipediaSettings, get_settings


logger = logging.getLogger(__name__)

# bytes <first>-<last>/<total>; total may be '*' when the server does not know it
_CONTENT_RANGE_RE = re.compile(r"^\s*bytes\s+(\d+)-(\d+)/(\d+|\*)\s*$", re.IGNORECASE)

# Characters encodeURIComponent leaves alone on top of quote()'s unreserved set
_TITLE_SAFE = "!*'()"


def encode_title(title: str) -> str:
    """Percent-encode an article title for use as a single path segment."""
    return quote(title, safe=_TITLE_SAFE)


def parse_content_range_total(value: Optional[str]) -> Optional[int]:
    """Return the ``<total>`` of a ``Content-Range`` header, or None when unusable."""
    if not value:
        return None
    match = _CONTENT_RANGE_RE.match(value)
    if not match:
        return None
    total = match.group(3)
    if not total.isdigit():
        return None
    return int(total)


def classify_ranged_response(response: httpx.Response, url: Optional[str] = None) -> RangedFetchResult:
    """Decide FULL vs PARTIAL for a ranged HTML response.

    200 means the provider ignored the range and sent the whole document; a
    Content-Range total is kept only when it matches the body size.
    206 means the range was honoured; the total comes from ``Content-Range``.
    A 206 whose header is absent or malformed is downgraded to FULL with an
    unknown total instead of failing. Any other status raises RemoteFetchError.
    """
    status = response.status_code
    if status not in (200, 206):
        raise RemoteFetchError.from_status(status, response.reason_phrase, url=url)

    body = response.content
    body_text = body.decode("utf-8", errors="replace")
    header = response.headers.get("content-range")
    total = parse_content_range_total(header)

    if status == 206:
        if total is None:
            logger.debug(f"Partial response with unusable Content-Range {header!r}; treating as full content")
            return RangedFetchResult(StatusKind.FULL, body_text, None, len(body))
        return RangedFetchResult(StatusKind.PARTIAL, body_text, total, len(body))

    if total is not None and total != len(body):
        logger.debug(f"Full response of {len(body)} bytes with Content-Range total {total}; ignoring total")
        total = None
    return RangedFetchResult(StatusKind.FULL, body_text, total, len(body))


class WikipediaClient(ContentSource):
    """Async client for the Wikipedia content provider."""

    def __init__(
        self,
        settings: Optional[WikipediaSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._settings = settings or get_settings().wikipedia
        self._transport = transport
        self._logger = logger or logging.getLogger(__name__)

    @property
    def settings(self) -> WikipediaSettings:
        return self._settings

    def _http_client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {
            "headers": {"User-Agent": self._settings.user_agent},
            "follow_redirects": self._settings.follow_redirects,
        }
        if self._settings.timeout_s:
            kwargs["timeout"] = httpx.Timeout(self._settings.timeout_s)
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def _get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        self._logger.debug(f"GET {url} params={params} headers={headers}")
        try:
            async with self._http_client() as client:
                return await client.get(url, headers=headers, params=params)
        except httpx.RequestError as e:
            self._logger.error(f"Error fetching from Wikipedia API: {e}")
            raise RemoteFetchError.from_cause(e, url=url) from e

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._logger.error(f"Invalid JSON from {response.request.url}: {e}")
            raise RemoteFetchError(
                "Wikipedia API returned an invalid JSON response",
                status=response.status_code,
                cause=str(e),
                url=str(response.request.url)
            ) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if not response.is_success:
            self._logger.error(
                f"Error fetching from Wikipedia API: {response.status_code} {response.reason_phrase}"
            )
            raise RemoteFetchError.from_status(
                response.status_code,
                response.reason_phrase,
                url=str(response.request.url)
            )

    async def fetch_html_range(self, request: PageRequest) -> RangedFetchResult:
        """Fetch ``request``'s byte window of the article HTML."""
        url = f"{self._settings.rest_base_url}/page/html/{encode_title(request.title)}"
        headers = {
            "Range": request.range_header(),
            # Offsets must refer to the stored bytes, not a compressed stream
            "Accept-Encoding": "identity",
            "Accept": "text/html; charset=utf-8",
        }
        response = await self._get(url, headers=headers)
        try:
            result = classify_ranged_response(response, url=url)
        except RemoteFetchError:
            self._logger.error(
                f"Error fetching from Wikipedia API: {response.status_code} {response.reason_phrase}"
            )
            raise
        self._logger.debug(
            f"Fetched {result.returned_length} bytes of '{request.title}' "
            f"({result.status_kind.value}, total={result.total_length})"
        )
        return result

    async def fetch_json(self, path: str) -> Any:
        """GET ``<rest_base_url><path>`` and decode the JSON body."""
        url = f"{self._settings.rest_base_url}{path}"
        response = await self._get(url, headers={"Accept": "application/json"})
        self._raise_for_status(response)
        return self._decode_json(response)

    async def search(self, query: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """Full-text search through the MediaWiki action API."""
        params = {
            "action": "query",
            "list": "search",
            "srsearch": query,
            "format": "json",
            "utf8": "1",
            "srlimit": str(limit or self._settings.search_limit),
        }
        response = await self._get(self._settings.action_api_url, params=params)
        self._raise_for_status(response)
        data = self._decode_json(response)

        if not isinstance(data, dict) or not isinstance((data.get("query") or {}).get("search"), list):
            info = ""
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                info = data["error"].get("info") or ""
            message = f"Search error: {response.status_code} {response.reason_phrase}".rstrip()
            if info:
                message = f"{message} ({info})"
            raise RemoteFetchError(
                message,
                status=response.status_code,
                status_text=response.reason_phrase,
                url=str(response.request.url)
            )
        return data
